"""
CompLens tests - price parsing and price range
"""

import pytest
import sys
sys.path.insert(0, ".")

from complens.domain.errors import EmptyInputError, ParseError
from complens.domain.pricing import find_price_range, parse_price
from complens.domain.valuation import price_range
from complens.schemas.listing import PropertyRecord


def make_record(record_id: str, price: str) -> PropertyRecord:
    return PropertyRecord(id=record_id, price=price)


class TestParsePrice:
    """Price string parsing"""

    def test_space_grouped_price(self):
        """'120 000 €' -> 120000"""
        assert parse_price("120 000 €") == 120000

    def test_millions(self):
        """Several digit groups"""
        assert parse_price("1 250 000 €") == 1250000

    def test_non_breaking_space(self):
        """Non-breaking spaces count as whitespace"""
        assert parse_price("120\u00a0000 €") == 120000

    def test_ungrouped_price(self):
        """No grouping at all"""
        assert parse_price("95000 €") == 95000

    @pytest.mark.parametrize("price", ["abc €", "€", "", "-5 €", "12.5 €", "1,200 €"])
    def test_malformed_price(self, price):
        """Anything but digits before the suffix is a parse error"""
        with pytest.raises(ParseError):
            parse_price(price)

    def test_non_string(self):
        """Numbers are not price strings"""
        with pytest.raises(ParseError):
            parse_price(120000)


class TestFindPriceRange:
    """Cheapest / most expensive exemplar"""

    def test_min_and_max(self):
        """Extremes with their ids and positions"""
        records = [
            make_record("a", "150 000 €"),
            make_record("b", "90 000 €"),
            make_record("c", "310 000 €"),
            make_record("d", "200 000 €"),
        ]

        result = find_price_range(records)

        assert (result.min.id, result.min.price, result.min.index) == ("b", 90000, 1)
        assert (result.max.id, result.max.price, result.max.index) == ("c", 310000, 2)

    def test_ties_keep_first_occurrence(self):
        """Later equal prices do not replace an extreme"""
        records = [
            make_record("a", "100 000 €"),
            make_record("b", "300 000 €"),
            make_record("c", "100 000 €"),
            make_record("d", "300 000 €"),
        ]

        result = find_price_range(records)

        assert result.min.index == 0
        assert result.max.index == 1

    def test_first_record_is_max(self):
        """The first record can be the maximum"""
        records = [make_record("a", "500 €"), make_record("b", "100 €")]

        result = find_price_range(records)

        assert result.max.id == "a"
        assert result.min.id == "b"

    def test_singleton(self):
        """A single record is both min and max"""
        result = price_range([make_record("only", "120 000 €")])

        assert result.min == result.max
        assert result.min.id == "only"
        assert result.min.price == 120000

    def test_min_not_above_max(self):
        """min.price <= max.price, both taken from the input"""
        prices = ["70 000 €", "70 000 €", "65 000 €", "80 000 €", "79 999 €"]
        records = [make_record(str(i), p) for i, p in enumerate(prices)]

        result = find_price_range(records)

        parsed = [parse_price(p) for p in prices]
        assert result.min.price <= result.max.price
        assert result.min.price == min(parsed)
        assert result.max.price == max(parsed)

    def test_empty(self):
        """Empty reference set"""
        with pytest.raises(EmptyInputError):
            find_price_range([])

    def test_malformed_price_propagates(self):
        """A bad price anywhere fails the whole scan"""
        records = [make_record("a", "100 000 €"), make_record("b", "call us")]

        with pytest.raises(ParseError):
            find_price_range(records)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
