"""Services — extraction, planning, writing and wiring."""
