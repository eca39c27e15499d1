"""
CLI subcommands for the crowdfund dashboard.

Usage:
    python -m cli show
    python -m cli create --title "Solar kit" --pledge-cost 0.05 --pledges-needed 20
    python -m cli fund 3 --quantity 2
    python -m cli complete 3
    python -m cli config set --rpc-url http://127.0.0.1:8545
"""

import argparse
import logging
import sys

from core.amounts import from_wei
from core.domain import Campaign, Snapshot
from core.orchestrator import TxOutcome
from core.roles import can_create_campaign, shares_for, snapshot_is_privileged
from dapp_platform.config import load_settings, normalize_address
from dapp_platform.dashboard import DashboardSession, create_dashboard
from dapp_platform.facade import CrowdfundingFacade
from dapp_platform.user_config import get_user_config_path, load_user_config, update_user_config


def _print_status(message: str) -> None:
    if message:
        print(f"  » {message}")


def _print_campaigns(title: str, campaigns: tuple[Campaign, ...], snapshot: Snapshot):
    print(f"\n{title} ({len(campaigns)})")
    print("-" * 60)
    if not campaigns:
        print("  (none)")
        return
    for c in campaigns:
        shares = shares_for(snapshot.investments, c.id)
        print(
            f"  #{c.id} {c.title} — by {c.entrepreneur}\n"
            f"      cost {from_wei(c.pledge_cost)} ETH | sold {c.pledges_count}/{c.pledges_needed}"
            f" | raised {from_wei(c.total_raised)} ETH | my shares {shares}"
        )


def print_snapshot(snapshot: Snapshot, account: str | None):
    """Print the dashboard view of a snapshot."""
    print("\n" + "=" * 60)
    print("CROWDFUNDING DASHBOARD")
    print("=" * 60)
    print(f"  Connected:       {account or '—'}")
    print(f"  Owner:           {snapshot.owner or '—'}")
    print(f"  SuperOwner:      {snapshot.super_owner or '—'}")
    print(f"  Contract balance {from_wei(snapshot.contract_balance)} ETH")
    print(f"  Fees/Royalties:  {from_wei(snapshot.remaining_fees)} ETH")
    print(f"  Campaign fee:    {from_wei(snapshot.fee)} ETH")
    if snapshot_is_privileged(snapshot, account):
        print("  Role:            admin (owners cannot create campaigns)")
    elif not can_create_campaign(snapshot, account):
        print("  Role:            read-only (no account connected)")

    _print_campaigns("ACTIVE CAMPAIGNS", snapshot.active, snapshot)
    _print_campaigns("COMPLETED CAMPAIGNS", snapshot.completed, snapshot)
    _print_campaigns("CANCELLED CAMPAIGNS", snapshot.cancelled, snapshot)

    print("\nMY INVESTMENTS")
    print("-" * 60)
    if not snapshot.investments:
        print("  (none)")
    for inv in snapshot.investments:
        print(f"  Campaign {inv.campaign_id}: {inv.shares} shares")


async def _open_dashboard(args) -> DashboardSession:
    try:
        settings = load_settings(
            rpc_url=args.rpc_url,
            contract_address=args.contract,
            abi_path=args.abi,
            account=args.account,
        )
        dashboard = create_dashboard(settings)
    except (ValueError, ImportError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    dashboard.status.subscribe(_print_status)
    await dashboard.start()
    return dashboard


def _exit_for(outcome: TxOutcome):
    sys.exit(0 if outcome.ok else 1)


async def cmd_show(args):
    dashboard = await _open_dashboard(args)
    if dashboard.snapshot is None:
        sys.exit(1)
    print_snapshot(dashboard.snapshot, dashboard.account)


async def cmd_create(args):
    dashboard = await _open_dashboard(args)
    outcome = await CrowdfundingFacade(dashboard).create_campaign(
        args.title, args.pledge_cost, args.pledges_needed,
    )
    _exit_for(outcome)


async def cmd_fund(args):
    dashboard = await _open_dashboard(args)
    _exit_for(await CrowdfundingFacade(dashboard).fund_campaign(args.id, args.quantity))


async def cmd_complete(args):
    dashboard = await _open_dashboard(args)
    _exit_for(await CrowdfundingFacade(dashboard).complete_campaign(args.id))


async def cmd_cancel(args):
    dashboard = await _open_dashboard(args)
    _exit_for(await CrowdfundingFacade(dashboard).cancel_campaign(args.id))


async def cmd_refunds(args):
    dashboard = await _open_dashboard(args)
    _exit_for(await CrowdfundingFacade(dashboard).claim_refunds())


async def cmd_withdraw(args):
    dashboard = await _open_dashboard(args)
    _exit_for(await CrowdfundingFacade(dashboard).withdraw_owner_funds())


async def cmd_destroy(args):
    dashboard = await _open_dashboard(args)
    _exit_for(await CrowdfundingFacade(dashboard).destroy_contract())


async def cmd_ban(args):
    dashboard = await _open_dashboard(args)
    _exit_for(await CrowdfundingFacade(dashboard).ban_entrepreneur(args.address))


async def cmd_change_owner(args):
    dashboard = await _open_dashboard(args)
    _exit_for(await CrowdfundingFacade(dashboard).change_owner(args.address))


def cmd_config(args):
    if args.config_action == "show":
        config = load_user_config()
        print(f"Config file:      {get_user_config_path()}")
        print(f"RPC URL:          {config.rpc_url or '(default)'}")
        print(f"Contract address: {config.contract_address or '(default)'}")
        return

    if args.config_action == "set":
        contract = args.set_contract
        if contract is not None:
            try:
                contract = normalize_address(contract, label="contract address")
            except ValueError as e:
                print(f"Error: {e}")
                sys.exit(1)
        update_user_config(rpc_url=args.set_rpc_url, contract_address=contract)
        print(f"Saved {get_user_config_path()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crowdfund",
        description="crowdfund-dashboard — read and act on a crowdfunding ledger contract",
    )
    parser.add_argument("--rpc-url", help="JSON-RPC endpoint (or set CROWDFUND_RPC_URL)")
    parser.add_argument("--contract", help="Contract address (or set CROWDFUND_CONTRACT_ADDRESS)")
    parser.add_argument("--abi", help="Path to a JSON ABI file (or set CROWDFUND_ABI_PATH)")
    parser.add_argument("--account", help="Account to act as (default: node's first account)")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("show", help="Show contract state and campaigns")

    # --- campaigns ---
    p_create = subparsers.add_parser("create", help="Create a campaign (pays the campaign fee)")
    p_create.add_argument("--title", required=True, help="Campaign title")
    p_create.add_argument("--pledge-cost", required=True, help="Cost of one pledge in ETH")
    p_create.add_argument("--pledges-needed", required=True, type=int, help="Pledges needed to fulfil")

    p_fund = subparsers.add_parser("fund", help="Pledge to a campaign")
    p_fund.add_argument("id", type=int, help="Campaign ID")
    p_fund.add_argument("--quantity", type=int, default=1, help="Number of pledges (default: 1)")

    p_complete = subparsers.add_parser("complete", help="Fulfil a funded campaign")
    p_complete.add_argument("id", type=int, help="Campaign ID")

    p_cancel = subparsers.add_parser("cancel", help="Cancel a campaign")
    p_cancel.add_argument("id", type=int, help="Campaign ID")

    subparsers.add_parser("refunds", help="Claim refunds from cancelled campaigns")

    # --- admin ---
    subparsers.add_parser("withdraw", help="Withdraw fees and royalties (owner)")
    subparsers.add_parser("destroy", help="Destroy the contract (owner)")

    p_ban = subparsers.add_parser("ban", help="Ban an entrepreneur (owner)")
    p_ban.add_argument("address", help="Entrepreneur address")

    p_owner = subparsers.add_parser("change-owner", help="Transfer ownership (owner)")
    p_owner.add_argument("address", help="New owner address")

    # --- config ---
    p_config = subparsers.add_parser("config", help="Manage saved connection settings")
    sp_config = p_config.add_subparsers(dest="config_action", required=True)
    sp_config.add_parser("show", help="Show saved settings")
    sp_set = sp_config.add_parser("set", help="Save settings")
    sp_set.add_argument("--rpc-url", dest="set_rpc_url", help="JSON-RPC endpoint to save")
    sp_set.add_argument("--contract", dest="set_contract", help="Contract address to save")

    return parser


COMMANDS = {
    "show": cmd_show,
    "create": cmd_create,
    "fund": cmd_fund,
    "complete": cmd_complete,
    "cancel": cmd_cancel,
    "refunds": cmd_refunds,
    "withdraw": cmd_withdraw,
    "destroy": cmd_destroy,
    "ban": cmd_ban,
    "change-owner": cmd_change_owner,
}


async def main(argv: list[str] | None = None):
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "config":
        cmd_config(args)
        return

    await COMMANDS[args.command](args)
