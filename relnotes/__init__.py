"""Generate release notes documents from Asana tasks."""

__version__ = "0.1.0"
