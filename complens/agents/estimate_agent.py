"""
Estimate Agent
Estimates the price of a feature set against a reference set.
"""

from .base import BaseAgent
from complens.schemas.listing import FeatureSet, PropertyRecord
from complens.schemas.results import Estimate
from complens.domain.errors import EmptyInputError
from complens.domain.estimator import PriceEstimator


class EstimateInput:
    """Estimate Agent input"""
    def __init__(self, records: list[PropertyRecord], query: FeatureSet):
        self.records = records
        self.query = query


class EstimateAgent(BaseAgent[EstimateInput, Estimate]):
    """
    Estimate Agent

    Uses the rule-based PriceEstimator.
    """

    name = "EstimateAgent"

    def __init__(self, missing_year_policy: str = None, bracket_by: str = None):
        super().__init__()
        self.estimator = PriceEstimator(
            missing_year_policy=missing_year_policy,
            bracket_by=bracket_by,
        )

    def _validate_input(self, input_data: EstimateInput) -> None:
        super()._validate_input(input_data)
        if not input_data.records:
            raise EmptyInputError(f"{self.name}: reference set is empty.")

    def _process(self, input_data: EstimateInput) -> Estimate:
        return self.estimator.estimate(
            records=input_data.records,
            query=input_data.query,
        )
