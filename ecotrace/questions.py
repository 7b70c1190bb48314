"""
Question Catalog - the fixed, ordered set of wizard steps.

Each step groups thematically related questions. A question is either a
bounded numeric range (rendered as a slider) or a single choice over an
enumerated set of integer codes (rendered as radio buttons). The catalog is
built once at import time and never changes.
"""

from __future__ import annotations
from dataclasses import dataclass
from numbers import Real
from typing import Dict, Tuple, Union

from ecotrace.errors import InvalidAnswerError, StepOutOfRangeError, UnknownQuestionError

__all__ = [
    "ChoiceOption",
    "ChoiceInput",
    "RangeInput",
    "Question",
    "CATALOG",
    "STEP_TITLES",
    "step_count",
    "questions_for_step",
    "all_questions",
    "get_question",
    "range_defaults",
    "validate_answer",
]


# ============================================================================
# Question model
# ============================================================================

@dataclass(frozen=True)
class ChoiceOption:
    """Single selectable option of a choice question."""
    value: int
    label: str


@dataclass(frozen=True)
class ChoiceInput:
    options: Tuple[ChoiceOption, ...]

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError("choice input needs at least one option")
        values = [opt.value for opt in self.options]
        if len(set(values)) != len(values):
            raise ValueError(f"duplicate option values: {values}")

    @property
    def values(self) -> Tuple[int, ...]:
        return tuple(opt.value for opt in self.options)

    def label_for(self, value: float) -> str | None:
        for opt in self.options:
            if opt.value == value:
                return opt.label
        return None


@dataclass(frozen=True)
class RangeInput:
    """Bounded numeric input with a default and step increment."""
    minimum: float
    maximum: float
    step: float
    default: float
    unit: str

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if not (self.minimum <= self.default <= self.maximum):
            raise ValueError(
                f"default {self.default} outside [{self.minimum}, {self.maximum}]"
            )


@dataclass(frozen=True)
class Question:
    question_id: str
    prompt: str
    kind: Union[RangeInput, ChoiceInput]

    @property
    def is_choice(self) -> bool:
        return isinstance(self.kind, ChoiceInput)

    @property
    def is_range(self) -> bool:
        return isinstance(self.kind, RangeInput)


def _range(question_id: str, prompt: str, minimum, maximum, step, default, unit: str) -> Question:
    return Question(question_id, prompt, RangeInput(minimum, maximum, step, default, unit))


def _choice(question_id: str, prompt: str, *options: Tuple[int, str]) -> Question:
    return Question(
        question_id,
        prompt,
        ChoiceInput(tuple(ChoiceOption(value, label) for value, label in options)),
    )


# ============================================================================
# Catalog
# ============================================================================

STEP_TITLES: Tuple[str, ...] = (
    "Personal Info",
    "Transport",
    "Housing",
    "Food",
    "Consumption",
)

CATALOG: Tuple[Tuple[Question, ...], ...] = (
    # Personal Info
    (
        _range("household", "How many people live in your household?", 1, 10, 1, 1, "person(s)"),
        _range("age", "How old are you?", 18, 100, 1, 30, "years"),
    ),
    # Transport
    (
        _range("car_km", "How many kilometres do you drive per year?", 0, 50000, 1000, 10000, "km"),
        _choice(
            "public_transport",
            "How often do you use public transport?",
            (0, "Never"),
            (1, "Occasionally"),
            (2, "Regularly"),
            (3, "Daily"),
        ),
    ),
    # Housing
    (
        _range("home_size", "What is the floor area of your home (in m²)?", 0, 300, 10, 80, "m²"),
        _choice(
            "energy_type",
            "What type of energy do you use for heating?",
            (4, "Electricity"),
            (3, "Natural gas"),
            (2, "Heating oil"),
            (1, "Renewable energy"),
        ),
    ),
    # Food
    (
        _choice(
            "meat_consumption",
            "How often do you eat meat?",
            (4, "Daily"),
            (3, "Several times a week"),
            (2, "Occasionally"),
            (1, "Never (vegetarian/vegan)"),
        ),
        _choice(
            "local_food",
            "How do you choose your food?",
            (100, "I always favour local and seasonal produce"),
            (75, "I try to buy local and seasonal when I can"),
            (50, "I sometimes buy local and seasonal, but it is not a priority"),
            (25, "I don't really pay attention to origin or season"),
        ),
    ),
    # Consumption
    (
        _choice(
            "shopping_habits",
            "How often do you buy new clothes?",
            (4, "Very often (several times a month)"),
            (3, "Regularly (once a month)"),
            (2, "Occasionally (a few times a year)"),
            (1, "Rarely (once a year or less)"),
        ),
        _range(
            "electronic_devices",
            "How many electronic devices do you own?",
            0, 20, 1, 5, "device(s)",
        ),
    ),
)

_BY_ID: Dict[str, Question] = {q.question_id: q for step in CATALOG for q in step}

if len(_BY_ID) != sum(len(step) for step in CATALOG):
    raise ValueError("question ids must be unique across the catalog")
if len(STEP_TITLES) != len(CATALOG):
    raise ValueError("every step needs a title")


# ============================================================================
# Accessors
# ============================================================================

def step_count() -> int:
    """Number of live question steps (the results screen sits at this index)."""
    return len(CATALOG)


def questions_for_step(step: int) -> Tuple[Question, ...]:
    """
    Return the ordered questions of one wizard step.

    Raises:
        StepOutOfRangeError: if ``step`` is not in [0, step_count()).
    """
    if isinstance(step, bool) or not isinstance(step, int) or not 0 <= step < len(CATALOG):
        raise StepOutOfRangeError(f"step {step!r} outside [0, {len(CATALOG)})")
    return CATALOG[step]


def all_questions() -> Tuple[Question, ...]:
    return tuple(_BY_ID.values())


def get_question(question_id: str) -> Question:
    try:
        return _BY_ID[question_id]
    except KeyError:
        raise UnknownQuestionError(f"unknown question id: {question_id!r}") from None


def range_defaults() -> Dict[str, float]:
    """Map every range question id to its default value."""
    return {qid: q.kind.default for qid, q in _BY_ID.items() if q.is_range}


def validate_answer(question_id: str, value: float) -> Question:
    """
    Check that ``value`` is a legal answer for ``question_id``.

    Choice answers must be one of the option codes; range answers must lie
    within [minimum, maximum]. Returns the question on success.
    """
    question = get_question(question_id)
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidAnswerError(f"{question_id}: expected a number, got {value!r}")
    if question.is_choice:
        if value not in question.kind.values:
            raise InvalidAnswerError(
                f"{question_id}: {value!r} is not one of {list(question.kind.values)}"
            )
    elif not question.kind.minimum <= value <= question.kind.maximum:
        raise InvalidAnswerError(
            f"{question_id}: {value!r} outside [{question.kind.minimum}, {question.kind.maximum}]"
        )
    return question
