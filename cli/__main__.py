"""
Entry point for running the crowdfund CLI as a module.

Usage:
    python -m cli show
    python -m cli fund 3 --quantity 2
    python -m cli config show
"""

import asyncio
from .commands import main

if __name__ == "__main__":
    asyncio.run(main())
