"""Aggregation helpers for bucketed census tables.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

ONE = Decimal("1")

# (column key, lower bound, upper bound)
Bracket = tuple[str, int, int]

AGE_BRACKETS: list[Bracket] = [
    ("0 - 4", 0, 5), ("5 - 9", 5, 10), ("10 - 14", 10, 15), ("15 - 19", 15, 20),
    ("20 - 24", 20, 25), ("25 - 29", 25, 30), ("30 - 34", 30, 35), ("35 - 39", 35, 40),
    ("40 - 44", 40, 45), ("45 - 49", 45, 50), ("50 - 54", 50, 55), ("55 - 59", 55, 60),
    ("60 - 64", 60, 65), ("65 - 69", 65, 70), ("70 - 74", 70, 75), ("75 - 79", 75, 80),
    ("80 - 84", 80, 85), ("85 - 89", 85, 90), ("90 & Over", 90, 95),
]

YOUNG_KEYS = [key for key, lo, _ in AGE_BRACKETS if lo < 25]
WORKING_KEYS = [key for key, lo, _ in AGE_BRACKETS if 25 <= lo < 65]
SENIOR_KEYS = [key for key, lo, _ in AGE_BRACKETS if lo >= 65]

# Top bracket is open-ended; 30,000 is its effective upper bound for interpolation.
INCOME_BRACKETS: list[Bracket] = [
    ("Below $1,000", 0, 1000), ("$1,000 - $1,999", 1000, 2000),
    ("$2,000 - $2,999", 2000, 3000), ("$3,000 - $3,999", 3000, 4000),
    ("$4,000 - $4,999", 4000, 5000), ("$5,000 - $5,999", 5000, 6000),
    ("$6,000 - $6,999", 6000, 7000), ("$7,000 - $7,999", 7000, 8000),
    ("$8,000 - $8,999", 8000, 9000), ("$9,000 - $9,999", 9000, 10000),
    ("$10,000 - $10,999", 10000, 11000), ("$11,000 - $11,999", 11000, 12000),
    ("$12,000 - $12,999", 12000, 13000), ("$13,000 - $13,999", 13000, 14000),
    ("$14,000 - $14,999", 14000, 15000), ("$15,000 - $17,499", 15000, 17500),
    ("$17,500 - $19,999", 17500, 20000), ("$20,000 & Over", 20000, 30000),
]

PLACEHOLDER_TOKENS = {"", "-", "na", "NA", "n.a."}


def round_half_up(value: float | Decimal) -> int:
    return int(Decimal(str(value)).quantize(ONE, ROUND_HALF_UP))


def parse_count(value) -> int:
    """Parse a SingStat cell ("12,345", "-", "na", None) into an int, 0 if absent."""
    if value is None:
        return 0
    text = str(value).strip()
    if text in PLACEHOLDER_TOKENS:
        return 0
    try:
        return int(Decimal(text.replace(",", "")))
    except (InvalidOperation, ValueError, OverflowError):
        return 0


def percent_share(part: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(Decimal(part) / Decimal(total) * 100)


def grouped_median(counts: dict[str, int], brackets: list[Bracket], total: int) -> int | None:
    """Median of bucketed counts by linear interpolation inside the median bucket.

    median = lo + (total/2 - cumulative_before) / bucket_count * (hi - lo)

    Returns None when total is zero or the cumulative count never reaches
    the midpoint.
    """
    if total <= 0:
        return None
    half = Decimal(total) / 2
    cumulative = 0
    for key, lo, hi in brackets:
        count = counts.get(key, 0)
        cumulative += count
        if cumulative >= half:
            before = cumulative - count
            median = lo + (half - before) / Decimal(count or 1) * (hi - lo)
            return round_half_up(median)
    return None
