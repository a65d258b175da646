import math
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Tuple

import boto3

from goodgov.logging_config import create_logger


def is_finite(value: Any) -> bool:
    """Return True only for real numbers that are neither NaN nor infinite.

    None, strings and booleans are never finite.
    """
    if value is None or isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_truthy_number(value: Any) -> bool:
    """Return True for a number that is present, not NaN and not zero."""
    if value is None or isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)) or math.isnan(value):
        return False
    return value != 0


def parse_number(text: str) -> float:
    """Loosely parse text into a float.

    Surrounding whitespace is ignored and an empty string is 0.0.
    Anything that does not parse becomes NaN instead of raising.

    Args:
        text: Raw cell text

    Returns:
        Parsed float, possibly NaN
    """
    stripped = text.strip()
    if stripped == "":
        return 0.0
    # float() accepts digit separators and "nan" spellings we do not want
    if "_" in stripped or stripped.lower().lstrip("+-") in ("nan", "inf"):
        return float("nan")
    try:
        return float(stripped)
    except ValueError:
        return float("nan")


def round_number(value: float, decimals: int) -> float:
    """Round a value to a given number of decimals, halves rounding up.

    Works on the decimal text of the value so 1.005 rounds to 1.01.
    Non-finite values are returned unchanged.
    """
    if not is_finite(value):
        return value
    try:
        scaled = Decimal(repr(value)).scaleb(decimals)
    except InvalidOperation:
        return value
    rounded = (scaled + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)
    return float(rounded.scaleb(-decimals))


def finite_extent(values: Iterable[Any]) -> Optional[Tuple[float, float]]:
    """Return (min, max) of the finite values, or None when there are none."""
    lo = hi = None
    for value in values:
        if not is_finite(value):
            continue
        if lo is None or value < lo:
            lo = value
        if hi is None or value > hi:
            hi = value
    if lo is None:
        return None
    return lo, hi


def s3_credentials() -> Tuple[Any, str]:
    """
    Resolve AWS credentials from the boto3 default credential chain.

    :return: Frozen credentials and the region name
    :raises ValueError: If no credentials can be found
    """
    logger = create_logger(__name__)

    session = boto3.Session()
    credentials = session.get_credentials()
    if credentials is None:
        raise ValueError("No AWS credentials found in the default credential chain")

    region = session.region_name or "us-east-1"
    logger.info(f"Resolved AWS credentials for region {region}")
    return credentials.get_frozen_credentials(), region
