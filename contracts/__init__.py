"""Versioned API contracts for dashboard clients."""
