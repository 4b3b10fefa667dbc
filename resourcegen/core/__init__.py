"""Core domain — models, services and use cases. No CLI or I/O formatting here."""
