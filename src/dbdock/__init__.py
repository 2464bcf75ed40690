"""dbdock - database containers on top of Docker."""

__version__ = "0.1.0"
