"""Annualizes reported compensation entries into a single total."""

import math
import re
from collections import Counter
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from fara_tracker.extraction.models import CompensationEntry
from fara_tracker.logging.logger import Log

ZERO = Decimal("0")

PERIOD_MULTIPLIERS: dict[str, Decimal] = {
    "monthly": Decimal("12"),
    "quarterly": Decimal("4"),
    "annual": Decimal("1"),
    "one-time": Decimal("1"),
}

_NON_NUMERIC = re.compile(r"[^0-9.]")


def coerce_amount(value: object) -> Decimal:
    """Coerce a model-reported monetary value into a non-negative Decimal.

    Strings such as ``"$50,000"`` keep only digits and dots. Anything that
    cannot be parsed is zero.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, int):
        return Decimal(value) if value > 0 else ZERO
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or value <= 0:
            return ZERO
        return Decimal(str(value))
    if isinstance(value, Decimal):
        return value if value.is_finite() and value > 0 else ZERO
    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        if not cleaned:
            return ZERO
        try:
            parsed = Decimal(cleaned)
        except InvalidOperation:
            return ZERO
        return parsed if parsed.is_finite() else ZERO
    return ZERO


class CompensationNormalizer:
    """Converts compensation entries to an annual total.

    Entries with an unknown period contribute nothing; they are tallied in
    ``unrecognized_periods`` so the losses can be reviewed after a run.
    """

    def __init__(self) -> None:
        self.unrecognized_periods: Counter[str] = Counter()

    def annualize(self, entry: CompensationEntry) -> Decimal:
        period = (entry.period or "").strip().lower()
        multiplier = PERIOD_MULTIPLIERS.get(period)
        if multiplier is None:
            self.unrecognized_periods[period or "<missing>"] += 1
            Log.debug(f"Unrecognized compensation period {entry.period!r}, counted as 0")
            return ZERO
        return entry.amount * multiplier

    def normalize(
        self,
        entries: Sequence[CompensationEntry] | None,
        flat_total: object = None,
    ) -> Decimal:
        """Return the annualized total of ``entries``.

        Falls back to ``flat_total`` when there are no entries or they sum to
        zero.
        """
        total = ZERO
        if entries is not None:
            total = sum((self.annualize(entry) for entry in entries), ZERO)
        if total == ZERO:
            flat = coerce_amount(flat_total)
            if flat > ZERO:
                return flat
        return max(total, ZERO)
