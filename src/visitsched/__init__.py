"""Visit schedule calculator for follow-up study visits."""

__version__ = "0.1.0"
