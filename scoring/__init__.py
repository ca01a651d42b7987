"""
Scoring package: action weights and proportional allocation of the reporting window.
"""

from .allocation import build_weight_grid
from .weights import action_weight

__all__ = ["build_weight_grid", "action_weight"]
