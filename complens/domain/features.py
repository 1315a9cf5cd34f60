"""
Per-feature scorers

Each scorer turns one feature of a listing into signed points. Values
arrive as listing-page strings; every scorer defines what a missing
value means instead of treating it as an error.
"""

import math
import re
from typing import Optional, Sequence, Union

from loguru import logger

from complens.config import settings
from complens.domain.errors import MissingFeatureError, ParseError
from complens.domain.keys import Condition, FeatureKey
from complens.schemas.listing import PropertyRecord

Numeric = Union[int, float, str, None]

# area used when a listing does not state one
MISSING_AREA = -100.0

_WHITESPACE_RE = re.compile(r"\s+")

# plain decimal: no exponent, no digit separators, no inf/nan
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

CONDITION_POINTS: dict[Condition, int] = {
    Condition.NEEDS_RENOVATING: -150,
    Condition.SANITARY_RENOVATION_NEEDED: -70,
    Condition.DEVELOPMENT: 10,
    Condition.READY: 20,
    Condition.SATISFACTORY: 50,
    Condition.GOOD_CONDITION: 80,
    Condition.SANITARY_RENOVATION_DONE: 100,
    Condition.RENOVATED: 150,
    Condition.ALL_BRAND_NEW: 200,
    Condition.UNKNOWN: 0,
}


def to_number(value: Numeric, default: float = 0.0) -> float:
    """
    Convert a feature value to a float.

    None and blank strings give `default`.

    Raises:
        ParseError: If the value is not a plain finite decimal
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ParseError(f"Not a number: {value!r}")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return default
        if not text.isascii() or not _DECIMAL_RE.fullmatch(text):
            raise ParseError(f"Not a number: {value!r}")
        number = float(text)

    if not math.isfinite(number):
        raise ParseError(f"Not a finite number: {value!r}")
    return number


def parse_area(area: Optional[str]) -> float:
    """
    Area in square metres from "85 m²".

    Everything from the first "m" on is the unit. A missing area is
    MISSING_AREA.
    """
    if not area:
        return MISSING_AREA
    return to_number(_WHITESPACE_RE.sub("", area.split("m")[0]))


def parse_year(value: Optional[str]) -> Optional[int]:
    """Year as int, None when missing, unparseable or zero."""
    if value is None:
        return None
    try:
        year = to_number(value)
    except ParseError:
        return None
    if not year or not year.is_integer():
        return None
    return int(year)


def score_feature(
    feature: Numeric = None,
    minimum: Numeric = None,
    maximum: Numeric = None,
    points: float = 1,
) -> float:
    """
    Points for one numeric feature.

    sign(maximum - minimum) * points * feature, where minimum and maximum
    are the feature's values on the cheapest and most expensive
    exemplars. Equal exemplar values give 0 whatever the feature is.
    Missing values count as 0.
    """
    feature_value = to_number(feature)
    difference = to_number(maximum) - to_number(minimum)
    if difference == 0:
        return 0.0
    sign = 1 if difference > 0 else -1
    return sign * points * feature_value


def score_condition(label: Optional[str]) -> int:
    """Points for a condition label, 0 when unknown or missing."""
    return CONDITION_POINTS[Condition.from_label(label)]


def min_built_year(records: Sequence[PropertyRecord]) -> Optional[int]:
    """Oldest usable built-in year of a reference set, None if there is none."""
    years = [
        year
        for year in (parse_year(r.features.get(FeatureKey.BUILT_IN_YEAR.value)) for r in records)
        if year is not None
    ]
    return min(years) if years else None


class YearScorer:
    """
    Built-in year points

    A listing scores its age advantage over the oldest listing of the
    reference set: query_year - min_year.

    policy:
    - "error": missing years raise MissingFeatureError
    - "zero": missing years score 0

    Reference records are ranked with "zero" whatever the policy, see
    Ranker.
    """

    def __init__(self, records: Sequence[PropertyRecord], policy: Optional[str] = None):
        self.policy = policy or settings.MISSING_YEAR_POLICY
        if self.policy not in ("error", "zero"):
            raise ValueError(f"Unknown missing year policy: {self.policy}")
        self.min_year = min_built_year(records)

    def score(self, built_in_year: Optional[str], policy: Optional[str] = None) -> float:
        """Year points; `policy` overrides the scorer's policy for this call."""
        policy = policy or self.policy
        year = parse_year(built_in_year)

        if year is None:
            return self._missing("no usable built-in year", policy)
        if self.min_year is None:
            return self._missing("no reference record has a built-in year", policy)

        return float(year - self.min_year)

    def _missing(self, detail: str, policy: str) -> float:
        if policy == "error":
            raise MissingFeatureError(FeatureKey.BUILT_IN_YEAR.value, detail)
        logger.debug(f"Built-in year scored 0: {detail}")
        return 0.0
