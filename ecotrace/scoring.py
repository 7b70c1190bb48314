from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging
import math
from numbers import Real

from ecotrace.questions import range_defaults

_log = logging.getLogger(__name__)

__all__ = [
    "Category",
    "FootprintResult",
    "score",
    "contributions",
    "category_for",
    "recommendations_for",
]


# ============================================================================
# Emission factors (tonnes CO2e per year)
# ============================================================================

CAR_TONNES_PER_1000_KM = Decimal("0.12")
HOME_TONNES_PER_M2 = Decimal("0.02")
TONNES_PER_DEVICE = Decimal("0.1")
# Hot water, waste and public services everybody shares
BASELINE_TONNES = Decimal("1.5")

PUBLIC_TRANSPORT_IMPACT: Dict[int, Decimal] = {
    0: Decimal("0"),      # Never
    1: Decimal("0.1"),    # Occasionally
    2: Decimal("0.25"),   # Regularly
    3: Decimal("0.5"),    # Daily
}

HEATING_ENERGY_IMPACT: Dict[int, Decimal] = {
    1: Decimal("0.5"),    # Renewable energy
    2: Decimal("3"),      # Heating oil
    3: Decimal("2"),      # Natural gas
    4: Decimal("1.5"),    # Electricity
}

MEAT_IMPACT: Dict[int, Decimal] = {
    1: Decimal("0.5"),    # Never
    2: Decimal("1.2"),    # Occasionally
    3: Decimal("2"),      # Several times a week
    4: Decimal("3"),      # Daily
}

LOCAL_FOOD_IMPACT: Dict[int, Decimal] = {
    25: Decimal("1.2"),
    50: Decimal("0.9"),
    75: Decimal("0.5"),
    100: Decimal("0.3"),
}

SHOPPING_IMPACT: Dict[int, Decimal] = {
    1: Decimal("0.3"),
    2: Decimal("0.8"),
    3: Decimal("1.5"),
    4: Decimal("2.5"),
}

# question id scored through each lookup table
LOOKUP_TABLES: Dict[str, Dict[int, Decimal]] = {
    "public_transport": PUBLIC_TRANSPORT_IMPACT,
    "energy_type": HEATING_ENERGY_IMPACT,
    "meat_consumption": MEAT_IMPACT,
    "local_food": LOCAL_FOOD_IMPACT,
    "shopping_habits": SHOPPING_IMPACT,
}


# ============================================================================
# Categories
# ============================================================================

class Category(str, Enum):
    EXCELLENT = "Excellent"
    MODERATE = "Moderate"
    POOR = "Poor"


EXCELLENT_MAX_TONNES = 6.5
MODERATE_MAX_TONNES = 10.0

_CATEGORY_DETAILS: Dict[Category, Tuple[str, str]] = {
    Category.EXCELLENT: (
        "good",
        "Well done! You are on track for the 2-tonne target set for 2050. Keep it up!",
    ),
    Category.MODERATE: (
        "medium",
        "You are in line with the current average, but still far from the 2-tonne "
        "climate target. There is room to improve!",
    ),
    Category.POOR: (
        "bad",
        "You are above the average. It is urgent to act to reduce your climate impact. "
        "Follow our recommendations to bring it down!",
    ),
}


@dataclass(frozen=True)
class FootprintResult:
    """Outcome of one scoring run. Derived from the answers, never stored."""
    footprint_tonnes: int
    category: Category
    message: str
    accent: str
    recommendations: Tuple[str, ...] = ()
    raw_tonnes: float = 0.0
    contributions: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "footprint_tonnes": self.footprint_tonnes,
            "category": self.category.value,
            "message": self.message,
            "accent": self.accent,
            "recommendations": list(self.recommendations),
            "raw_tonnes": self.raw_tonnes,
            "contributions": dict(self.contributions),
        }


def category_for(footprint_tonnes: float) -> Tuple[Category, str, str]:
    """
    Map a footprint to its (category, accent, message).

    Thresholds are inclusive: <= 6.5 Excellent, <= 10 Moderate, otherwise Poor.
    """
    if footprint_tonnes <= EXCELLENT_MAX_TONNES:
        cat = Category.EXCELLENT
    elif footprint_tonnes <= MODERATE_MAX_TONNES:
        cat = Category.MODERATE
    else:
        cat = Category.POOR
    accent, message = _CATEGORY_DETAILS[cat]
    return cat, accent, message


# ============================================================================
# Answer resolution
# ============================================================================

def _resolve(answers: Mapping[str, float], question_id: str) -> Optional[float]:
    """Recorded answer, else the range default; None for an absent choice.

    A recorded 0 stays an answer (no truthiness test). Values that
    are not finite numbers (strings, booleans, NaN) count as absent.
    """
    value = answers.get(question_id)
    if value is not None:
        if not isinstance(value, bool) and isinstance(value, Real) and math.isfinite(value):
            return value
        _log.debug("ignoring non-numeric answer %s=%r", question_id, value)
    return range_defaults().get(question_id)


def _amount(answers: Mapping[str, float], question_id: str) -> Decimal:
    value = _resolve(answers, question_id)
    return Decimal(0) if value is None else Decimal(str(value))


def _lookup(answers: Mapping[str, float], question_id: str) -> Decimal:
    code = _resolve(answers, question_id)
    if code is None:
        return Decimal(0)
    impact = LOOKUP_TABLES[question_id].get(code)
    if impact is None:
        _log.debug("no impact for %s=%r, counting 0", question_id, code)
        return Decimal(0)
    return impact


def _household(answers: Mapping[str, float]) -> Decimal:
    size = _amount(answers, "household")
    return size if size > 0 else Decimal(1)


def _contributions(answers: Mapping[str, float]) -> Dict[str, Decimal]:
    return {
        "car_travel": _amount(answers, "car_km") * CAR_TONNES_PER_1000_KM / 1000,
        "public_transport": _lookup(answers, "public_transport"),
        "home_size": _amount(answers, "home_size") * HOME_TONNES_PER_M2,
        "heating_energy": _lookup(answers, "energy_type"),
        "meat_consumption": _lookup(answers, "meat_consumption"),
        "local_food": _lookup(answers, "local_food"),
        "shopping_habits": _lookup(answers, "shopping_habits"),
        "electronics": _amount(answers, "electronic_devices") * TONNES_PER_DEVICE,
        "baseline": BASELINE_TONNES,
    }


def contributions(answers: Mapping[str, float]) -> Dict[str, float]:
    """Per-term tonnes for the whole household, in display order."""
    return {k: float(v) for k, v in _contributions(answers).items()}


# ============================================================================
# Recommendations
# ============================================================================

# (question id, predicate, text) evaluated in this order
_RECOMMENDATION_RULES = (
    (
        "car_km",
        lambda v: v > 15000,
        "Try to cut down on car journeys by favouring carpooling or public transport.",
    ),
    (
        "meat_consumption",
        lambda v: v > 2,
        "Reducing your meat consumption would have a significant impact on your carbon footprint.",
    ),
    (
        "local_food",
        lambda v: v < 50,
        "Favour local and seasonal produce to reduce the impact of transporting food.",
    ),
    (
        "shopping_habits",
        lambda v: v > 2,
        "Consider buying second-hand clothes or extending the life of the clothes you own.",
    ),
    (
        "electronic_devices",
        lambda v: v > 10,
        "Limit purchases of new electronic devices and favour repair.",
    ),
)


def recommendations_for(answers: Mapping[str, float]) -> List[str]:
    """
    Personalised tips, at most one per rule, in fixed order.

    An absent choice answer compares as 0. That keeps every ``>`` rule quiet
    but makes the local food rule fire when ``local_food`` was never answered.
    """
    tips: List[str] = []
    for question_id, predicate, text in _RECOMMENDATION_RULES:
        value = _resolve(answers, question_id)
        if predicate(0 if value is None else value):
            tips.append(text)
    return tips


# ============================================================================
# Score
# ============================================================================

def score(answers: Mapping[str, float]) -> FootprintResult:
    """
    Estimate the annual per-person footprint from a full or partial answer set.

    The additive terms are summed, split across the household (a household of
    0 or less counts as 1), rounded half up and floored at 0.

    Example:
        >>> score({"car_km": 0, "public_transport": 0, "home_size": 0, "energy_type": 1,
        ...        "meat_consumption": 1, "local_food": 100, "shopping_habits": 1,
        ...        "electronic_devices": 0, "household": 1}).footprint_tonnes
        3
    """
    parts = _contributions(answers)
    per_person = sum(parts.values(), Decimal(0)) / _household(answers)
    tonnes = max(0, int(per_person.quantize(Decimal(1), rounding=ROUND_HALF_UP)))
    category, accent, message = category_for(tonnes)
    result = FootprintResult(
        footprint_tonnes=tonnes,
        category=category,
        message=message,
        accent=accent,
        recommendations=tuple(recommendations_for(answers)),
        raw_tonnes=float(per_person),
        contributions={k: float(v) for k, v in parts.items()},
    )
    _log.debug("footprint %d t (%s), raw %.3f", tonnes, category.value, result.raw_tonnes)
    return result
