from __future__ import annotations

import math
import re
from typing import List, Optional

import pandas as pd
from dateutil.relativedelta import relativedelta


def round_half_up(x: float) -> int:
    """Round to the nearest whole unit, halves towards +infinity (floor(x + 0.5))."""
    return int(math.floor(x + 0.5))


def round_to(x: float, decimals: int) -> float:
    """Half-up rounding to a fixed number of decimals (display precision)."""
    m = 10 ** decimals
    return math.floor(x * m + 0.5) / m


def safe_div(a: float, b: float, default: float = 0.0) -> float:
    return a / b if b else default


def month_label(month_index: int) -> str:
    """Label for a 0-based month index: Y1M1, Y1M2, ..., Y2M1."""
    year = month_index // 12 + 1
    return f"Y{year}M{month_index % 12 + 1}"


def period_dates(start_date: pd.Timestamp, n_months: int) -> List[pd.Timestamp]:
    """Month-start dates for n projection months, beginning with start_date's month."""
    base = pd.Timestamp(year=start_date.year, month=start_date.month, day=1)
    return [base + relativedelta(months=k) for k in range(n_months)]


def break_even_label(month_index: Optional[int]) -> Optional[str]:
    if month_index is None:
        return None
    return f"Year {month_index // 12 + 1}, Month {month_index % 12 + 1}"


def _plain_number(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def format_currency(amount: float) -> str:
    """Compact currency: $1.25M, $12.5K, $950."""
    if amount >= 1_000_000:
        return f"${round_to(amount / 1_000_000, 2):.2f}M"
    if amount >= 1_000:
        return f"${round_to(amount / 1_000, 1):.1f}K"
    return f"${_plain_number(amount)}"


def format_pct(value: float) -> str:
    return f"{round_half_up(value)}%"


def parse_currency(text: str) -> float:
    """Inverse of format_currency for charting: "$1.25M" -> 1250000.0."""
    m = re.fullmatch(r"\s*\$?(-?[0-9.,]+)\s*([KM]?)\s*", str(text))
    if not m:
        raise ValueError(f"Not a currency string: {text!r}")
    value = float(m.group(1).replace(",", ""))
    scale = {"": 1.0, "K": 1_000.0, "M": 1_000_000.0}[m.group(2)]
    return value * scale
