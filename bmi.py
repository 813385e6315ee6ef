# bmi.py
"""
BMI form core: input parsing, validation, the BMI engine and the form state machine.

Nothing in here knows about Flask or HTML. The page in main.py only ever sees
a View produced by render(FormState).
"""
import enum
import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

logger = logging.getLogger(__name__)

# -------- Accepted ranges (inclusive; metric) --------
RANGES = {
    "height_cm": (100.0, 250.0),
    "weight_kg": (30.0, 300.0),
}

SCALE_MAX = 40.0
SCALE_TICKS = (15, 25, 30, 40)

_NUMBER_RE = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")


class ValidationFailure(enum.Enum):
    HEIGHT_OUT_OF_RANGE = "Рост должен быть от 100 до 250 см"
    WEIGHT_OUT_OF_RANGE = "Вес должен быть от 30 до 300 кг"

    @property
    def message(self) -> str:
        return self.value


class ValidationError(Exception):
    """Raised by validate(); the reducer turns it into the form's error text."""

    def __init__(self, failure: ValidationFailure):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def message(self) -> str:
        return self.failure.message


class Category(enum.Enum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


# (upper bound, exclusive) -> category. 24.9 / 29.9 are kept as-is, not the WHO 25 / 30.
CATEGORY_BOUNDS = (
    (18.5, Category.UNDERWEIGHT),
    (24.9, Category.NORMAL),
    (29.9, Category.OVERWEIGHT),
)

# category -> (label, tip, tone)
CATEGORY_INFO = {
    Category.UNDERWEIGHT: ("Недостаточный вес", "Рекомендуется увеличить калорийность питания", "blue"),
    Category.NORMAL: ("Нормальный вес", "Отличный результат! Поддерживайте текущий образ жизни", "green"),
    Category.OVERWEIGHT: ("Избыточный вес", "Рекомендуется увеличить физическую активность", "yellow"),
    Category.OBESE: ("Ожирение", "Рекомендуется проконсультироваться с врачом", "red"),
}


@dataclass(frozen=True)
class Measurements:
    height_cm: float
    weight_kg: float


@dataclass(frozen=True)
class BMIResult:
    value: float
    category: Category
    tip: str
    position: float

    @property
    def label(self) -> str:
        return CATEGORY_INFO[self.category][0]

    @property
    def tone(self) -> str:
        return CATEGORY_INFO[self.category][2]


@dataclass(frozen=True)
class FormState:
    """
    Whole state of one form. Replaced, never mutated.

    error and result are never both set: a successful calculation drops the
    error and a failed one drops the result.
    """
    height: str = ""
    weight: str = ""
    error: Optional[str] = None
    result: Optional[BMIResult] = None

    @property
    def status(self) -> str:
        if self.error:
            return "error"
        if self.result is not None:
            return "computed"
        return "idle"


# -------- Events --------
@dataclass(frozen=True)
class EditHeight:
    text: str


@dataclass(frozen=True)
class EditWeight:
    text: str


@dataclass(frozen=True)
class Calculate:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[EditHeight, EditWeight, Calculate, Reset]


# -------- Validator --------
def parse_number(text) -> Optional[float]:
    """Decimal text -> float, or None when empty, malformed or not finite."""
    if text is None:
        return None
    s = str(text).strip()
    if not s or not _NUMBER_RE.match(s):
        return None
    value = float(s)
    if not math.isfinite(value):
        return None
    return value


def _in_range(name, value):
    lo, hi = RANGES[name]
    return value is not None and lo <= value <= hi


def validate(height_text, weight_text) -> Measurements:
    # height first; weight is not looked at once height has failed
    height = parse_number(height_text)
    if not _in_range("height_cm", height):
        raise ValidationError(ValidationFailure.HEIGHT_OUT_OF_RANGE)
    weight = parse_number(weight_text)
    if not _in_range("weight_kg", weight):
        raise ValidationError(ValidationFailure.WEIGHT_OUT_OF_RANGE)
    return Measurements(height_cm=height, weight_kg=weight)


# -------- BMI engine --------
def round1(value: float) -> float:
    """
    Round to one decimal the way JavaScript's toFixed(1) does.

    Decimal(float) is the exact binary value, so half-up on it matches
    toFixed rather than Python's round(), which rounds half to even.
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def classify(bmi: float) -> Category:
    for upper, category in CATEGORY_BOUNDS:
        if bmi < upper:
            return category
    return Category.OBESE


def scale_position(bmi: float) -> float:
    return min(bmi / SCALE_MAX, 1.0)


def compute_bmi(height_cm: float, weight_kg: float) -> BMIResult:
    if height_cm <= 0:
        raise ValueError("height must be positive, got %r" % (height_cm,))
    height_m = height_cm / 100
    value = round1(weight_kg / (height_m * height_m))
    category = classify(value)
    return BMIResult(
        value=value,
        category=category,
        tip=CATEGORY_INFO[category][1],
        position=scale_position(value),
    )


# -------- State machine --------
def initial_state() -> FormState:
    return FormState()


def reduce(state: FormState, event: Event) -> FormState:
    if isinstance(event, EditHeight):
        return FormState(event.text, state.weight, state.error, state.result)
    if isinstance(event, EditWeight):
        return FormState(state.height, event.text, state.error, state.result)
    if isinstance(event, Reset):
        logger.debug("form reset from %s", state.status)
        return initial_state()
    if isinstance(event, Calculate):
        try:
            m = validate(state.height, state.weight)
        except ValidationError as e:
            logger.info("validation failed: %s (height=%r, weight=%r)", e.failure.name, state.height, state.weight)
            return FormState(state.height, state.weight, error=e.message, result=None)
        result = compute_bmi(m.height_cm, m.weight_kg)
        logger.debug("computed bmi=%s category=%s", result.value, result.category.value)
        return FormState(state.height, state.weight, error=None, result=result)
    raise TypeError("unknown form event: %r" % (event,))


def run(events, state: Optional[FormState] = None) -> FormState:
    """Fold a sequence of events over state (or a fresh form)."""
    if state is None:
        state = initial_state()
    for event in events:
        state = reduce(state, event)
    return state


# -------- Presentation contract --------
@dataclass(frozen=True)
class View:
    height: str
    weight: str
    error: Optional[str]
    can_calculate: bool
    bmi: Optional[float] = None
    bmi_text: Optional[str] = None
    category: Optional[Category] = None
    category_label: Optional[str] = None
    tip: Optional[str] = None
    tone: Optional[str] = None
    marker_position: Optional[float] = None
    marker_percent: Optional[float] = None

    @property
    def has_result(self) -> bool:
        return self.bmi is not None

    def as_dict(self):
        return {
            "height": self.height,
            "weight": self.weight,
            "error": self.error,
            "can_calculate": self.can_calculate,
            "bmi": self.bmi,
            "bmi_text": self.bmi_text,
            "category": None if self.category is None else self.category.value,
            "category_label": self.category_label,
            "tip": self.tip,
            "tone": self.tone,
            "marker_position": self.marker_position,
            "marker_percent": self.marker_percent,
        }


def format_bmi(value: float) -> str:
    # printed like a JS number: 20.0 -> "20", 24.2 -> "24.2"
    text = "%.1f" % value
    if text.endswith(".0"):
        text = text[:-2]
    return text


def render(state: FormState) -> View:
    can_calculate = bool(state.height) and bool(state.weight)
    r = state.result
    if r is None:
        return View(height=state.height, weight=state.weight, error=state.error or None, can_calculate=can_calculate)
    return View(
        height=state.height,
        weight=state.weight,
        error=None,
        can_calculate=can_calculate,
        bmi=r.value,
        bmi_text=format_bmi(r.value),
        category=r.category,
        category_label=r.label,
        tip=r.tip,
        tone=r.tone,
        marker_position=r.position,
        marker_percent=r.position * 100,
    )
