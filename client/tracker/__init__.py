"""tracker78 client data layer."""

__version__ = "0.1.0"
