"""
Price parsing and price range

Listing prices come as display strings ("120 000 €"). This module turns
them into integers and finds the cheapest and most expensive record of a
reference set, the exemplars every feature score is measured against.
"""

import re
from typing import Sequence

from complens.domain.errors import EmptyInputError, ParseError
from complens.schemas.listing import PropertyRecord
from complens.schemas.results import PricePoint, PriceRange

# currency suffix is the last two characters, e.g. " €"
CURRENCY_SUFFIX_LENGTH = 2

_WHITESPACE_RE = re.compile(r"\s+")


def parse_price(price: str) -> int:
    """
    Parse a price string.

    Drops the two character currency suffix and all whitespace, the rest
    must be digits.

    Args:
        price: Price as shown, e.g. "120 000 €"

    Returns:
        int: 120000

    Raises:
        ParseError: If the remainder is empty or not all digits
    """
    if not isinstance(price, str):
        raise ParseError(f"Price must be a string, got {type(price).__name__}")

    digits = _WHITESPACE_RE.sub("", price[:-CURRENCY_SUFFIX_LENGTH])
    if not digits.isascii() or not digits.isdigit():
        raise ParseError(f"Malformed price: {price!r}")

    return int(digits)


def find_price_range(records: Sequence[PropertyRecord]) -> PriceRange:
    """
    Find the cheapest and the most expensive record in one pass.

    Both extremes keep the first record reaching them: a later record
    replaces `min` only when strictly cheaper and `max` only when strictly
    more expensive.

    Raises:
        EmptyInputError: If `records` is empty
        ParseError: If any price is malformed
    """
    if not records:
        raise EmptyInputError("Reference set is empty")

    first = records[0]
    lowest = highest = PricePoint(price=parse_price(first.price), id=first.id, index=0)

    for index in range(1, len(records)):
        record = records[index]
        current_price = parse_price(record.price)
        if current_price < lowest.price:
            lowest = PricePoint(price=current_price, id=record.id, index=index)
        if current_price > highest.price:
            highest = PricePoint(price=current_price, id=record.id, index=index)

    return PriceRange(min=lowest, max=highest)
