"""Per-user connection settings saved between runs (RPC URL, contract)."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path

USER_CONFIG_PATH_ENV = "CROWDFUND_USER_CONFIG_PATH"
APP_DIR_NAME = "crowdfund-dashboard"


@dataclass
class UserConfig:
    rpc_url: str | None = None
    contract_address: str | None = None


def get_user_config_path() -> Path:
    """Location of the saved settings file.

    ``CROWDFUND_USER_CONFIG_PATH`` wins when set; otherwise ``%APPDATA%`` on
    Windows and ``~/.config`` elsewhere.
    """
    override = os.environ.get(USER_CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override)

    if os.name == "nt":
        root = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
    else:
        root = Path.home() / ".config"
    return root / APP_DIR_NAME / "config.json"


def _clean(value) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    return None


def load_user_config() -> UserConfig:
    """Read saved settings; a missing or unreadable file yields empty settings."""
    path = get_user_config_path()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return UserConfig()

    if not isinstance(raw, dict):
        return UserConfig()
    return UserConfig(
        rpc_url=_clean(raw.get("rpc_url")),
        contract_address=_clean(raw.get("contract_address")),
    )


def save_user_config(config: UserConfig) -> None:
    target = get_user_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(asdict(config), indent=2), encoding="utf-8")


def update_user_config(*, rpc_url: str | None = None, contract_address: str | None = None) -> UserConfig:
    """Overwrite the given fields (blank clears them) and persist."""
    config = load_user_config()
    if rpc_url is not None:
        config.rpc_url = _clean(rpc_url)
    if contract_address is not None:
        config.contract_address = _clean(contract_address)
    save_user_config(config)
    return config
