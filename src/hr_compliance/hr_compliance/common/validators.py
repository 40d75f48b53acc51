from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def to_money(value, field_name: str) -> Decimal:
    """Coerce an amount to Decimal without going through float."""
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value)) if not isinstance(value, Decimal) else value
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a valid amount")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} is not a valid amount")
    return amount


def require_non_negative(value, field_name: str) -> Decimal:
    amount = to_money(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return amount


def require_positive(value, field_name: str) -> Decimal:
    amount = to_money(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return amount
