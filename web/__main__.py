"""
Serve the dashboard API with uvicorn.

Usage:
    python -m web [--port 8000] [--host 127.0.0.1] [--reload] [--log-level info]
"""

import argparse
import logging

import uvicorn

from dapp_platform.config import load_settings


def main():
    parser = argparse.ArgumentParser(
        prog="crowdfund-web",
        description="crowdfund-dashboard — HTTP API for a crowdfunding ledger contract",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Reload on source changes")
    parser.add_argument(
        "--log-level", default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level for the app and uvicorn (default: info)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings()
    except ValueError as e:
        parser.exit(1, f"Error: {e}\n")

    print(f"\n  Ledger node:  {settings.rpc_url}")
    print(f"  Contract:     {settings.contract_address}")
    print(f"  Dashboard at  http://{args.host}:{args.port}/api/dashboard\n")

    uvicorn.run(
        "web.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
