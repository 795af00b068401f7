"""Fleet-wide local account inventory and UID consistency reporting."""

__version__ = "0.1.0"
