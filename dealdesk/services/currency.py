"""Currency conversion from the USD base into an entity's local currency."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from numbers import Real

from dealdesk.core.exceptions import InvalidRateError

logger = logging.getLogger(__name__)

BASE_CURRENCY = "USD"


def validate_rate(rate: object, currency: str | None = None) -> float:
    """Return ``rate`` as a float, rejecting non-numeric, non-finite and non-positive values."""
    label = f" for {currency}" if currency else ""
    if isinstance(rate, bool):
        raise InvalidRateError(f"Exchange rate{label} must be numeric, got a boolean.")
    if isinstance(rate, str):
        try:
            rate = float(rate.strip())
        except ValueError as exc:
            raise InvalidRateError(f"Exchange rate{label} is not numeric: {rate!r}") from exc
    if not isinstance(rate, Real):
        raise InvalidRateError(f"Exchange rate{label} must be numeric, got {type(rate).__name__}.")
    value = float(rate)
    if not math.isfinite(value) or value <= 0:
        raise InvalidRateError(f"Exchange rate{label} must be a positive finite number, got {value}.")
    return value


class ExchangeRateTable(Mapping[str, float]):
    """Units of each currency per 1 USD. USD itself is implicit.

    Shared by the settings surface (which edits it) and the deal service
    (which reads it); entries are validated on the way in.
    """

    def __init__(self, rates: Mapping[str, object] | None = None) -> None:
        self._rates: dict[str, float] = {}
        for code, rate in (rates or {}).items():
            self.set(code, rate)

    def set(self, code: str, rate: object) -> float:
        key = code.strip().upper()
        value = validate_rate(rate, currency=key)
        self._rates[key] = value
        return value

    def snapshot(self) -> dict[str, float]:
        return dict(self._rates)

    def __getitem__(self, code: str) -> float:
        return self._rates[code.upper()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"ExchangeRateTable({self._rates!r})"


def effective_rate(
    target_currency: str,
    rate_table: Mapping[str, object],
    override: object | None = None,
) -> float:
    """Deal override first, then the table entry, then identity."""
    code = target_currency.upper()
    if override is not None:
        return validate_rate(override, currency=code)
    if code in rate_table:
        return validate_rate(rate_table[code], currency=code)
    if code != BASE_CURRENCY:
        logger.debug("currency.rate.missing", extra={"event": "currency.rate.missing", "currency": code})
    return 1.0


def convert(
    base_amount_usd: float,
    target_currency: str,
    rate_table: Mapping[str, object],
    override: object | None = None,
) -> float:
    """Convert a USD amount into ``target_currency``. No rounding is applied."""
    return base_amount_usd * effective_rate(target_currency, rate_table, override)
