"""
Pipeline Orchestrator
Runs the agents in order and assembles the valuation report.
"""

from typing import Optional

from loguru import logger
from complens.schemas.listing import FeatureSet
from complens.schemas.results import ValuationReport
from complens.domain.pricing import find_price_range
from complens.agents.collect_agent import CollectAgent
from complens.agents.rank_agent import RankAgent
from complens.agents.estimate_agent import EstimateAgent, EstimateInput


class ValuationPipeline:
    """
    Valuation pipeline

    [Phase 1: collect]
    Collect (listing ids -> reference set, failures skipped)

    [Phase 2: rank]
    Price range -> Rank (score curve)

    [Phase 3: estimate] <- only when a query is given
    Estimate (query -> price)
    """

    def __init__(
        self,
        collect_agent: Optional[CollectAgent] = None,
        missing_year_policy: Optional[str] = None,
        bracket_by: Optional[str] = None,
    ):
        self.collect_agent = collect_agent or CollectAgent()
        self.rank_agent = RankAgent(missing_year_policy=missing_year_policy)
        self.estimate_agent = EstimateAgent(
            missing_year_policy=missing_year_policy,
            bracket_by=bracket_by,
        )

        self.logger = logger.bind(component="Pipeline")

    def run(
        self,
        listing_ids: list[str],
        query: Optional[FeatureSet] = None,
    ) -> ValuationReport:
        """
        Run the whole pipeline

        Args:
            listing_ids: reference listings to collect
            query: features to estimate a price for (optional)

        Returns:
            ValuationReport, empty when nothing could be collected
        """
        requested = [str(listing_id) for listing_id in listing_ids]
        self.logger.info(f"Starting valuation for {len(requested)} listings")

        # 1. collect reference set
        self.logger.info("Step 1: Collecting listings...")
        collected = self.collect_agent.run(requested)

        if not collected.records:
            self.logger.warning("No listings collected")
            return ValuationReport(
                requested_ids=requested,
                skipped_ids=collected.skipped_ids,
            )

        # 2. rank
        self.logger.info("Step 2: Ranking listings...")
        price_range = find_price_range(collected.records)
        curve = self.rank_agent.run(collected.records)

        # 3. estimate
        estimate = None
        if query is not None:
            self.logger.info("Step 3: Estimating price...")
            estimate = self.estimate_agent.run(
                EstimateInput(records=collected.records, query=query)
            )

        report = ValuationReport(
            requested_ids=requested,
            skipped_ids=collected.skipped_ids,
            price_range=price_range,
            curve=curve,
            estimate=estimate,
        )

        self.logger.info(
            f"Pipeline complete: {report.collected_count}/{len(requested)} listings ranked"
        )
        return report
