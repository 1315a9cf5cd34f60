"""
CompLens agent package
Each agent has a single responsibility and fixed input/output types.
"""

from .base import BaseAgent
from .collect_agent import CollectAgent, CollectResult
from .rank_agent import RankAgent
from .estimate_agent import EstimateAgent, EstimateInput

__all__ = [
    "BaseAgent",
    "CollectAgent",
    "CollectResult",
    "RankAgent",
    "EstimateAgent",
    "EstimateInput",
]
