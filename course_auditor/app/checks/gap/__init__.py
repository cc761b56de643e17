"""
Gap analysis rules.

Deterministic, side-effect free checks over a ProjectSnapshot. Each rule
module exposes a build_* factory; battery.py assembles them in order.
"""

from .base import ChecklistRule, FindingTemplate, GapRule, OutlineRule
from .battery import GAP_ANALYSIS, CheckBattery, build_gap_analysis_battery

__all__ = [
    "ChecklistRule",
    "FindingTemplate",
    "GapRule",
    "OutlineRule",
    "GAP_ANALYSIS",
    "CheckBattery",
    "build_gap_analysis_battery",
]
