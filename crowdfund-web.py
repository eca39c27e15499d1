#!/usr/bin/env python3
"""
crowdfund — Web API

Starts a local web server exposing the dashboard snapshot and transaction
endpoints. Shares the same core, configuration and status messages as the
CLI (crowdfund.py).

Usage:
    python crowdfund-web.py [--port 8000] [--host 127.0.0.1]

Then open http://localhost:8000/api/dashboard in your browser.
"""

from web.__main__ import main


if __name__ == "__main__":
    main()
