"""
CompLens tests - ranking and price estimation
"""

import pytest
import sys
sys.path.insert(0, ".")

from complens.domain.errors import EmptyInputError, InterpolationError, MissingFeatureError
from complens.domain.estimator import PriceEstimator
from complens.domain.ranking import Ranker
from complens.domain.valuation import estimate_price, rank
from complens.schemas.listing import FeatureSet, PropertyRecord
from complens.schemas.results import EstimateMethod, ScoredProperty


def make_record(record_id: str, price: str, **features) -> PropertyRecord:
    return PropertyRecord(
        id=record_id,
        price=price,
        features={k: v for k, v in features.items() if v is not None},
    )


class TestRanker:
    """Score curve"""

    def setup_method(self):
        self.records = [
            make_record("a", "150 000 €", rooms="3", builtInYear="1990", totalArea="70 m²", condition="Satisfactory"),
            make_record("b", "90 000 €", rooms="1", builtInYear="1970", totalArea="35 m²", condition="Needs renovating"),
            make_record("c", "260 000 €", rooms="4", builtInYear="2015", totalArea="110 m²", condition="All brand-new"),
            make_record("d", "120 000 €", rooms="2", builtInYear="1985", totalArea="55 m²", condition="Good condition"),
        ]
        self.ranker = Ranker()

    def test_sorted_ascending(self):
        curve = self.ranker.rank(self.records)

        points = [entry.point for entry in curve]
        assert points == sorted(points)

    def test_permutation_of_input(self):
        """One entry per record, ids and prices carried over"""
        curve = self.ranker.rank(self.records)

        assert sorted(entry.id for entry in curve) == ["a", "b", "c", "d"]
        by_id = {entry.id: entry.price for entry in curve}
        assert by_id == {r.id: r.price for r in self.records}

    def test_expected_order(self):
        curve = self.ranker.rank(self.records)

        assert [entry.id for entry in curve] == ["b", "d", "a", "c"]

    def test_idempotent(self):
        assert rank(self.records) == rank(self.records)

    def test_ties_keep_input_order(self):
        """Identical features score equal and stay in input order"""
        records = [
            make_record("x", "100 000 €", rooms="2", builtInYear="2000", totalArea="50 m²"),
            make_record("y", "200 000 €", rooms="2", builtInYear="2000", totalArea="50 m²"),
            make_record("z", "150 000 €", rooms="2", builtInYear="2000", totalArea="50 m²"),
        ]

        curve = self.ranker.rank(records)

        assert [entry.id for entry in curve] == ["x", "y", "z"]
        assert len({entry.point for entry in curve}) == 1

    def test_empty(self):
        with pytest.raises(EmptyInputError):
            self.ranker.rank([])

    def test_missing_record_year(self):
        """A reference record without a year scores 0 year points under either policy"""
        records = self.records + [make_record("e", "100 000 €", rooms="2")]

        for policy in ("error", "zero"):
            curve = Ranker(missing_year_policy=policy).rank(records)

            assert [entry.id for entry in curve] == ["b", "e", "d", "a", "c"]
            # 2 rooms * 20, no year, missing area -100
            assert next(entry for entry in curve if entry.id == "e").point == -60

    def test_missing_query_year_still_fails(self):
        """The query keeps the error policy even when records lack years"""
        records = self.records + [make_record("e", "100 000 €", rooms="2")]

        with pytest.raises(MissingFeatureError):
            PriceEstimator(missing_year_policy="error").estimate(records, FeatureSet(rooms="2"))


class TestPriceEstimator:
    """Curve lookup"""

    def setup_method(self):
        # points: a = 20 + 40 = 60, b = 40 + 60 = 100
        self.records = [
            make_record("a", "100 000 €", rooms="1", builtInYear="2000", totalArea="40 m²"),
            make_record("b", "300 000 €", rooms="2", builtInYear="2000", totalArea="60 m²"),
        ]
        self.estimator = PriceEstimator(missing_year_policy="error", bracket_by="price")

    def test_exact_match(self):
        """Query identical to a reference listing gets its price"""
        query = FeatureSet(rooms="1", built_in_year="2000", total_area="40 m²")

        estimate = self.estimator.estimate(self.records, query)

        assert estimate.point == 60
        assert estimate.price == 100000
        assert estimate.method == EstimateMethod.EXACT

    def test_above_range(self):
        """10 000 points above the top of the curve add 5 000"""
        query = FeatureSet(rooms="0", built_in_year="2000", total_area="10100 m²")

        estimate = self.estimator.estimate(self.records, query)

        assert estimate.point == 10100
        assert estimate.price == 305000
        assert estimate.method == EstimateMethod.ABOVE_RANGE

    def test_below_range(self):
        query = FeatureSet(rooms="0", built_in_year="2000", total_area="20 m²")

        estimate = self.estimator.estimate(self.records, query)

        # (100000 - 20) / 2 + 20
        assert estimate.point == 20
        assert estimate.price == 50010
        assert estimate.method == EstimateMethod.BELOW_RANGE

    def test_from_curve_above_range(self):
        curve = [
            ScoredProperty(id="a", price="100 000 €", point=-50),
            ScoredProperty(id="b", price="300 000 €", point=200),
        ]

        estimate = self.estimator.estimate_from_curve(curve, 10200)

        assert estimate.price == 305000

    def test_from_curve_first_exact_match_wins(self):
        curve = [
            ScoredProperty(id="a", price="100 000 €", point=10),
            ScoredProperty(id="b", price="150 000 €", point=50),
            ScoredProperty(id="c", price="170 000 €", point=50),
            ScoredProperty(id="d", price="300 000 €", point=90),
        ]

        estimate = self.estimator.estimate_from_curve(curve, 50)

        assert estimate.price == 150000
        assert estimate.method == EstimateMethod.EXACT

    def test_from_empty_curve(self):
        with pytest.raises(EmptyInputError):
            self.estimator.estimate_from_curve([], 10)

    def test_empty_reference_set(self):
        with pytest.raises(EmptyInputError):
            self.estimator.estimate([], FeatureSet(rooms="1", built_in_year="2000"))

    def test_unknown_bracket_mode(self):
        with pytest.raises(ValueError):
            PriceEstimator(bracket_by="area")


class TestInterpolation:
    """Between two curve entries"""

    def setup_method(self):
        # curve: a (60, 50), b (85, 150), c (160, 200)
        self.records = [
            make_record("a", "50 €", rooms="1", builtInYear="2000", totalArea="40 m²"),
            make_record("b", "150 €", rooms="2", builtInYear="2000", totalArea="45 m²"),
            make_record("c", "200 €", rooms="3", builtInYear="2000", totalArea="100 m²"),
        ]
        # point 40 + 60 = 100
        self.query = FeatureSet(rooms="2", built_in_year="2000", total_area="60 m²")

    def test_bracket_by_price(self):
        """The first pair whose prices surround the point is used"""
        estimate = PriceEstimator(bracket_by="price").estimate(self.records, self.query)

        assert estimate.point == 100
        assert estimate.price == 100  # (150 - 50) / 2 + 50
        assert estimate.method == EstimateMethod.INTERPOLATED

    def test_bracket_by_point(self):
        """Neighbouring points surround the query point"""
        estimate = PriceEstimator(bracket_by="point").estimate(self.records, self.query)

        assert estimate.price == 175  # (200 - 150) / 2 + 150
        assert estimate.method == EstimateMethod.INTERPOLATED

    def test_no_bracketing_pair(self):
        """Points far below the prices find no pair when bracketing by price"""
        records = [
            make_record("a", "100 000 €", rooms="2", builtInYear="2000", totalArea="50 m²", condition="Good condition"),
            make_record("b", "200 000 €", rooms="4", builtInYear="2000", totalArea="50 m²", condition="Good condition"),
        ]
        query = FeatureSet(rooms="3", built_in_year="2000", total_area="50 m²", condition="Good condition")

        with pytest.raises(InterpolationError):
            PriceEstimator(bracket_by="price").estimate(records, query)

        estimate = PriceEstimator(bracket_by="point").estimate(records, query)
        assert estimate.point == 140
        assert estimate.price == 150000


class TestEstimatePriceFunction:
    """Function-level entry point"""

    def test_dict_query(self):
        records = [
            make_record("a", "100 000 €", rooms="1", builtInYear="2000", totalArea="40 m²"),
            make_record("b", "300 000 €", rooms="2", builtInYear="2000", totalArea="60 m²"),
        ]

        price = estimate_price(records, {"rooms": 2, "builtInYear": 2000, "totalArea": "60 m²"})

        assert price == 300000


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
