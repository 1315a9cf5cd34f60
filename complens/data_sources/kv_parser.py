"""
kv.ee listing page parser
Extracts a PropertyRecord from the markup of one listing page.
"""

import re

from bs4 import BeautifulSoup, NavigableString, Tag

from complens.domain.errors import ParseError
from complens.domain.keys import camel_key
from complens.domain.pricing import parse_price
from complens.schemas.listing import Location, PropertyRecord, PropertyType

# "Apartment for sale - Pärnu mnt 10, Kesklinn, Tallinn, Harjumaa"
_TITLE_LOCATION_RE = re.compile(r"\s-\s(.*)$")


class ListingParseError(ValueError):
    """Raised when the page lacks an element every listing has or its price is unreadable"""
    pass


def _text(node) -> str:
    """Text of a node with whitespace collapsed"""
    if isinstance(node, NavigableString):
        return " ".join(str(node).split())
    return " ".join(node.get_text(" ").split())


def _require(soup: BeautifulSoup, selector: str, listing_id: str) -> Tag:
    element = soup.select_one(selector)
    if element is None:
        raise ListingParseError(f"Listing {listing_id}: '{selector}' not found")
    return element


def parse_price_text(soup: BeautifulSoup, listing_id: str) -> str:
    """
    First text of the first element inside .price-outer.

    The text must be a price the engine can read, "Price on request"
    style placeholders are rejected.
    """
    outer = _require(soup, ".price-outer", listing_id)
    first = outer.find(True, recursive=False)
    if first is None or not first.contents:
        raise ListingParseError(f"Listing {listing_id}: empty price block")

    price = _text(first.contents[0])
    try:
        parse_price(price)
    except ParseError as e:
        raise ListingParseError(f"Listing {listing_id}: {e}") from e
    return price


def parse_location(title: str) -> Location:
    """Location parts after " - " in the title"""
    match = _TITLE_LOCATION_RE.search(title)
    if not match:
        return Location()

    parts = [part.strip() for part in match.group(1).split(",")]
    parts += [None] * (4 - len(parts))
    direction, city, parish, county = parts[:4]
    return Location(direction=direction, city=city, parish=parish, county=county)


def parse_feature_table(table: Tag) -> tuple[PropertyType, dict[str, str]]:
    """
    Property type from the first row, features from the rest.

    Row labels become camelCase keys ("Built in year" -> "builtInYear");
    rows without a value cell are skipped.
    """
    rows = table.find_all("tr")
    if not rows:
        return PropertyType(), {}

    kind, _, deal = _text(rows[0]).partition("for")
    property_type = PropertyType(property=kind.strip(), deal=deal.strip())

    features = {}
    for row in rows[1:]:
        cells = row.find_all(["th", "td"])
        if len(cells) < 2:
            continue
        key = camel_key(_text(cells[0]))
        if key:
            features[key] = _text(cells[1])

    return property_type, features


def parse_additional_info(soup: BeautifulSoup) -> dict[str, str]:
    """
    "Additional information" paragraph as key/value pairs.

    Each <strong> label starts a pair; its value is the text up to the
    next label.
    """
    paragraph = soup.select_one(".description p")
    if paragraph is None:
        return {}

    info = {}
    for label in paragraph.find_all("strong"):
        key = camel_key(_text(label).split(":")[0])
        if not key:
            continue

        value_parts = []
        for sibling in label.next_siblings:
            if isinstance(sibling, Tag) and sibling.name == "strong":
                break
            value_parts.append(_text(sibling))

        info[key] = " ".join(part for part in value_parts if part).lstrip(":").strip()

    return info


def parse_listing(html: str, listing_id: str) -> PropertyRecord:
    """
    Parse one listing page.

    Raises:
        ListingParseError: If price, title or feature table is missing or
            the price is unreadable
    """
    soup = BeautifulSoup(html, "html.parser")

    price = parse_price_text(soup, listing_id)
    title = _text(_require(soup, "h1", listing_id))
    table = _require(soup, ".table-lined", listing_id)
    property_type, features = parse_feature_table(table)

    return PropertyRecord(
        id=listing_id,
        price=price,
        property_type=property_type,
        location=parse_location(title),
        features=features,
        additional_info=parse_additional_info(soup),
    )
