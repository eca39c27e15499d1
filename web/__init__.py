"""Web UI for the crowdfund dashboard."""

__version__ = "1.0.0"
