"""Stateless core: read-model builder and transaction orchestrator."""

__version__ = "1.0.0"
