"""CLI sub-command groups registered by ``resourcegen.main``."""
