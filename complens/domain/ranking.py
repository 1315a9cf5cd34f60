"""
Ranker
Scores every listing of a reference set against the set itself.
"""

from typing import Optional, Sequence

from loguru import logger

from complens.domain.scoring import CompositeScorer
from complens.schemas.listing import FeatureSet, PropertyRecord
from complens.schemas.results import ScoredProperty


class Ranker:
    """
    Builds the score curve of a reference set

    Each listing is scored with the reference set's own exemplars
    (including itself); the result is sorted ascending by score, equal
    scores keeping their input order.

    Reference records may omit any feature, a record without a usable
    built-in year gets 0 year points instead of failing the whole set.
    """

    # year policy for reference records, the query keeps its own
    REFERENCE_YEAR_POLICY = "zero"

    def __init__(self, missing_year_policy: Optional[str] = None):
        self.missing_year_policy = missing_year_policy

    def rank(
        self,
        records: Sequence[PropertyRecord],
        scorer: Optional[CompositeScorer] = None,
    ) -> list[ScoredProperty]:
        """
        Rank a reference set.

        Args:
            records: Reference set
            scorer: Scorer already built for `records`, built here if omitted

        Returns:
            list[ScoredProperty]: the score curve
        """
        if scorer is None:
            scorer = CompositeScorer(records, missing_year_policy=self.missing_year_policy)

        scored = []
        for record in records:
            point = scorer.score(
                FeatureSet.from_record(record),
                missing_year_policy=self.REFERENCE_YEAR_POLICY,
            )
            logger.debug(f"Score for {record.id}: {point:.1f}")
            scored.append(ScoredProperty(id=record.id, price=record.price, point=point))

        return sorted(scored, key=lambda s: s.point)
