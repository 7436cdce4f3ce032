"""
Warm-up set calculator.

Suggests up to four ramp-up sets before a working weight:
bar x10 -> ~50% x5 -> ~70% x3 -> ~85% x2, each rounded to a loadable
2.5 kg step and skipped when it would be too close to its neighbours.
"""
import math
from dataclasses import dataclass
from typing import List, Optional

BAR_WEIGHT = 20.0
PLATE_STEP = 2.5
# At or below this target a warm-up isn't worth suggesting
MIN_TARGET_WEIGHT = 40.0


@dataclass(frozen=True)
class WarmupSet:
    weight: float
    reps: int
    purpose: str


def round_to_plate(weight: float) -> float:
    """Round to the nearest 2.5 kg, halves rounding up."""
    return math.floor(weight / PLATE_STEP + 0.5) * PLATE_STEP


def calculate_warmup_sets(target_weight: float) -> Optional[List[WarmupSet]]:
    """
    Warm-up sets for a target working weight.

    Returns:
        Two to four sets, lightest first, or None when the target is light
        enough (or the ramp short enough) that fewer than two sets apply

    Examples:
        >>> [s.weight for s in calculate_warmup_sets(100)]
        [20.0, 50.0, 70.0, 85.0]
        >>> calculate_warmup_sets(40) is None
        True
    """
    if target_weight <= MIN_TARGET_WEIGHT:
        return None

    sets: List[WarmupSet] = []

    if target_weight >= 60:
        sets.append(WarmupSet(weight=BAR_WEIGHT, reps=10, purpose="Mobility"))

    half = round_to_plate(target_weight * 0.5)
    if BAR_WEIGHT + 10 < half < target_weight * 0.65:
        sets.append(WarmupSet(weight=half, reps=5, purpose="Groove"))

    seventy = round_to_plate(target_weight * 0.7)
    if BAR_WEIGHT < seventy < target_weight * 0.82:
        sets.append(WarmupSet(weight=seventy, reps=3, purpose="Activate"))

    eighty_five = round_to_plate(target_weight * 0.85)
    if BAR_WEIGHT < eighty_five < target_weight - 5:
        sets.append(WarmupSet(weight=eighty_five, reps=2, purpose="Prime"))

    return sets if len(sets) >= 2 else None


def estimate_warmup_minutes(sets: List[WarmupSet]) -> int:
    """About a minute per warm-up set."""
    return len(sets)


def format_warmup_plan(sets: List[WarmupSet]) -> str:
    """
    One-line plan, e.g. "20kg×10 → 50kg×5 → 70kg×3".
    """
    return " → ".join(f"{s.weight:g}kg×{s.reps}" for s in sets)
