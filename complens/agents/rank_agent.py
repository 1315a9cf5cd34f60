"""
Rank Agent
Builds the score curve of a reference set.
"""

from .base import BaseAgent
from complens.schemas.listing import PropertyRecord
from complens.schemas.results import ScoredProperty
from complens.domain.errors import EmptyInputError
from complens.domain.ranking import Ranker


class RankAgent(BaseAgent[list[PropertyRecord], list[ScoredProperty]]):
    """
    Rank Agent

    Uses the rule-based Ranker.
    """

    name = "RankAgent"

    def __init__(self, missing_year_policy: str = None):
        super().__init__()
        self.ranker = Ranker(missing_year_policy=missing_year_policy)

    def _validate_input(self, records: list[PropertyRecord]) -> None:
        super()._validate_input(records)
        if not records:
            raise EmptyInputError(f"{self.name}: reference set is empty.")

    def _process(self, records: list[PropertyRecord]) -> list[ScoredProperty]:
        return self.ranker.rank(records)
