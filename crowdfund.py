#!/usr/bin/env python3
"""
crowdfund — command-line dashboard for a crowdfunding ledger contract.

Reads campaigns, fees and your investments from the deployed contract and
submits pledges, campaign actions and admin operations through your node
account.

Usage:
    python crowdfund.py show
    python crowdfund.py fund 3 --quantity 2

Connection settings come from CROWDFUND_RPC_URL / CROWDFUND_CONTRACT_ADDRESS
(or a .env file), or from `python crowdfund.py config set`.

This file is a thin wrapper around the cli/ package.
"""

import asyncio
from cli.commands import main

if __name__ == "__main__":
    asyncio.run(main())
