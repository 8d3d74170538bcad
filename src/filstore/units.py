from decimal import Decimal, InvalidOperation, localcontext
from typing import Union
from .constants import TOKEN_DECIMALS, EPOCHS_PER_DAY

Amount = Union[int, str, float, Decimal]


def parse_units(amount: Amount, decimals: int = TOKEN_DECIMALS) -> int:
    """
    Convert a whole-token amount to integer base units.
    parse_units(1) == 10**18, parse_units("0.5") == 5 * 10**17
    """
    if isinstance(amount, bool):
        raise ValueError(f"Invalid token amount: {amount!r}")
    try:
        # str() first so floats keep their shortest repr
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid token amount: {amount!r}") from None
    if not value.is_finite():
        raise ValueError(f"Invalid token amount: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = 100
        scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Too many decimal places in {amount!r} (max {decimals})")
    return int(scaled)


def format_units(value: int, decimals: int = TOKEN_DECIMALS) -> str:
    """
    Convert integer base units to a decimal string.
    Always keeps one fractional digit: format_units(10**18) == "1.0"
    """
    value = int(value)
    sign = '-' if value < 0 else ''
    whole, frac = divmod(abs(value), 10 ** decimals)
    frac_str = str(frac).rjust(decimals, '0').rstrip('0') or '0'
    return f"{sign}{whole}.{frac_str}"


def days_to_epochs(days: int) -> int:
    """Whole days only: a fractional lockup period is rejected, not truncated"""
    if isinstance(days, bool):
        raise ValueError(f"Invalid lockup period: {days!r}")
    try:
        value = Decimal(str(days).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid lockup period: {days!r}") from None
    if not value.is_finite() or value != value.to_integral_value():
        raise ValueError(f"Lockup period must be a whole number of days: {days!r}")
    return int(value) * EPOCHS_PER_DAY
