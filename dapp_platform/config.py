"""
Configuration for the crowdfund dashboard.

Settings resolve from explicit arguments, then environment variables (a
``.env`` file is loaded when present), then the user config file, then
built-in defaults.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from dotenv import load_dotenv

from .user_config import load_user_config

RPC_URL_ENV = "CROWDFUND_RPC_URL"
CONTRACT_ADDRESS_ENV = "CROWDFUND_CONTRACT_ADDRESS"
ABI_PATH_ENV = "CROWDFUND_ABI_PATH"
ACCOUNT_ENV = "CROWDFUND_ACCOUNT"

DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_CONTRACT_ADDRESS = "0x238E3678db35c906A2249fEb01c7A67bD79c7118"

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


@dataclass(frozen=True)
class LedgerSettings:
    rpc_url: str
    contract_address: str
    abi_path: str | None = None
    account: str | None = None


def is_address(value: str | None) -> bool:
    """Return True for a 20-byte hex address (checksum not enforced)."""
    return bool(value) and bool(_ADDRESS_RE.match(value.strip()))


def normalize_address(value: str | None, *, label: str = "address") -> str:
    """Strip and validate an address, raising ``ValueError`` if malformed."""
    candidate = (value or "").strip()
    if not is_address(candidate):
        raise ValueError(f"Invalid {label}: {value!r}")
    return candidate


def _env(name: str) -> str | None:
    return os.environ.get(name, "").strip() or None


def load_settings(
    *,
    rpc_url: str | None = None,
    contract_address: str | None = None,
    abi_path: str | None = None,
    account: str | None = None,
) -> LedgerSettings:
    """Resolve ledger settings.

    Raises:
        ValueError: If the resolved contract or account address is malformed.
    """
    load_dotenv()
    user = load_user_config()

    resolved_address = (
        contract_address
        or _env(CONTRACT_ADDRESS_ENV)
        or user.contract_address
        or DEFAULT_CONTRACT_ADDRESS
    )
    resolved_account = account or _env(ACCOUNT_ENV)

    return LedgerSettings(
        rpc_url=rpc_url or _env(RPC_URL_ENV) or user.rpc_url or DEFAULT_RPC_URL,
        contract_address=normalize_address(resolved_address, label="contract address"),
        abi_path=abi_path or _env(ABI_PATH_ENV),
        account=normalize_address(resolved_account, label="account") if resolved_account else None,
    )
