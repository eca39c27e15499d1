"""Exact integer currency arithmetic and ether/wei conversion."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation


UNITS = {
    "wei": 0,
    "gwei": 9,
    "ether": 18,
}

# Largest value a uint256 contract argument accepts.
UINT256_MAX = 2**256 - 1


def pledge_total(unit_cost: int, quantity: int) -> int:
    """Return the value to attach when funding ``quantity`` pledges.

    Both operands must be ``int``; the product is exact for any magnitude.
    """
    if isinstance(unit_cost, bool) or not isinstance(unit_cost, int):
        raise ValueError(f"Pledge cost must be an integer amount, got {unit_cost!r}")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValueError(f"Quantity must be an integer, got {quantity!r}")
    if unit_cost < 0:
        raise ValueError("Pledge cost cannot be negative")
    if quantity <= 0:
        raise ValueError("Quantity must be at least 1")
    return unit_cost * quantity


def _decimals(unit: str) -> int:
    try:
        return UNITS[unit]
    except KeyError:
        valid = ", ".join(UNITS)
        raise ValueError(f"Unknown unit '{unit}'. Supported units: {valid}") from None


def to_wei(amount: str | int | Decimal, unit: str = "ether") -> int:
    """Convert a user-entered amount to integer wei without rounding."""
    decimals = _decimals(unit)
    raw = amount.strip() if isinstance(amount, str) else amount
    if raw == "":
        raw = "0"
    try:
        value = Decimal(raw)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    if value < 0:
        raise ValueError("Amount cannot be negative")

    # Integer math on the digit tuple; Decimal arithmetic would round at 28 digits.
    _, digits, exponent = value.as_tuple()
    coefficient = int("".join(str(d) for d in digits) or "0")
    shift = exponent + decimals
    if shift >= 0:
        wei = coefficient * 10 ** shift
    else:
        divisor = 10 ** -shift
        if coefficient % divisor:
            raise ValueError(f"Amount {amount!r} has more than {decimals} decimal places")
        wei = coefficient // divisor
    if wei > UINT256_MAX:
        raise ValueError(f"Amount {amount!r} is too large")
    return wei


def from_wei(amount: int, unit: str = "ether") -> str:
    """Render integer wei as an exact decimal string in ``unit``."""
    decimals = _decimals(unit)
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(int(amount)), 10 ** decimals)
    if not decimals or not frac:
        return f"{sign}{whole}"
    frac_text = str(frac).rjust(decimals, "0").rstrip("0")
    return f"{sign}{whole}.{frac_text}"
