"""Account balance service with device-based trust."""

__version__ = "1.0.0"
