# ==============================================
# TOPIC 2: SIZE ANALYSIS & PLACEMENT
# ==============================================
#
# This package measures records and decides which backend
# holds their content.
#
# Modules:
# --------
# - size_evaluator.py   → Wire-format size, threshold checks
# - decision.py         → Backend, PlacementDecision, Transition
#
# ==============================================

from .decision import Backend, PlacementDecision, Transition
from .size_evaluator import STRUCTURED_ITEM_LIMIT, SizeEvaluator

__all__ = ["Backend", "PlacementDecision", "Transition", "STRUCTURED_ITEM_LIMIT", "SizeEvaluator"]
