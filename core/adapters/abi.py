"""ABI of the crowdfunding ledger contract surface consumed by the dashboard.

Only the functions the adapters call are listed. A full ABI file exported
from the compiler can replace it via ``CROWDFUND_ABI_PATH``.
"""

from __future__ import annotations

import json
from pathlib import Path


def _param(name: str, type_: str) -> dict:
    return {"name": name, "type": type_, "internalType": type_}


def _view(name: str, inputs: list[dict], outputs: list[dict]) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": inputs,
        "outputs": outputs,
    }


def _write(name: str, inputs: list[dict], *, payable: bool = False) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "payable" if payable else "nonpayable",
        "inputs": inputs,
        "outputs": [],
    }


CAMPAIGN_TUPLE = {
    "name": "",
    "type": "tuple",
    "internalType": "struct Crowdfunding.Campaign",
    "components": [
        _param("id", "uint256"),
        _param("entrepreneur", "address"),
        _param("title", "string"),
        _param("pledgeCost", "uint256"),
        _param("pledgesNeeded", "uint256"),
        _param("pledgesCount", "uint256"),
        _param("totalRaised", "uint256"),
        _param("status", "uint8"),
    ],
}


CROWDFUNDING_ABI: list[dict] = [
    _view("CAMPAIGN_FEE", [], [_param("", "uint256")]),
    _view("owner", [], [_param("", "address")]),
    _view("SUPER_OWNER", [], [_param("", "address")]),
    _view("getRemainingFeesAndRoyalties", [], [_param("", "uint256")]),
    _view("getActiveCampaigns", [], [_param("", "uint256[]")]),
    _view("getCompletedCampaigns", [], [_param("", "uint256[]")]),
    _view("getCancelledCampaigns", [], [_param("", "uint256[]")]),
    _view("getCampaign", [_param("id", "uint256")], [CAMPAIGN_TUPLE]),
    _view(
        "getInvestorInvestments",
        [_param("investor", "address")],
        [_param("ids", "uint256[]"), _param("sharesArr", "uint256[]")],
    ),
    _write(
        "createCampaign",
        [_param("title", "string"), _param("pledgeCost", "uint256"), _param("pledgesNeeded", "uint256")],
        payable=True,
    ),
    _write("fundCampaign", [_param("id", "uint256"), _param("shares", "uint256")], payable=True),
    _write("completeCampaign", [_param("id", "uint256")]),
    _write("cancelCampaign", [_param("id", "uint256")]),
    _write("refundInvestments", []),
    _write("withdrawOwnerFunds", []),
    _write("destroyContract", []),
    _write("banEntrepreneur", [_param("entrepreneur", "address")]),
    _write("changeOwner", [_param("newOwner", "address")]),
]


def load_abi(path: str | Path | None = None) -> list[dict]:
    """Return the ABI from a JSON file, or the built-in surface.

    Accepts either a bare ABI list or a compiler artifact with an ``abi`` key.
    """
    if not path:
        return CROWDFUNDING_ABI
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict) and "abi" in data:
        data = data["abi"]
    if not isinstance(data, list):
        raise ValueError(f"ABI file {path} does not contain an ABI list")
    return data
