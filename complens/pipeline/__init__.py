"""
Pipeline package
"""

from .orchestrator import ValuationPipeline

__all__ = ["ValuationPipeline"]
