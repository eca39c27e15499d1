"""Command-line client for the crowdfund dashboard."""
