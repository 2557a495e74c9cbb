"""
Shorthand blood pressure input parser: "120/80" or "120/80/72".
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

from bp_tracker.errors import IssueCode, ValidationIssue

SYSTOLIC_RANGE = (60, 250)
DIASTOLIC_RANGE = (40, 150)
HEART_RATE_RANGE = (40, 200)

# (field, label, bounds) in segment order
FIELDS = (
    ('systolic', 'Systolic', SYSTOLIC_RANGE),
    ('diastolic', 'Diastolic', DIASTOLIC_RANGE),
    ('heart_rate', 'Heart rate', HEART_RATE_RANGE),
)

_NUMBER_RE = re.compile(r'^[+-]?\d+(?:\.\d+)?$')


@dataclass(frozen=True)
class ParsedBPInput:
    systolic: int
    diastolic: int
    heart_rate: Optional[int] = None


@dataclass
class ParseResult:
    data: Optional[ParsedBPInput] = None
    errors: List[ValidationIssue] = field(default_factory=list)

    @property
    def success(self):
        return not self.errors

    @property
    def messages(self):
        return [issue.message for issue in self.errors]


def to_int(value):
    """Truncating integer conversion. Returns None when value is not a number.

    "120.7" -> 120, 80.9 -> 80, "-10" -> -10, "abc" -> None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return None
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not _NUMBER_RE.match(text):
            return None
        return int(text.split('.')[0])
    return None


def check_field(name, label, bounds, raw, errors):
    """Convert and range-check one field, appending any issue to errors."""
    value = to_int(raw)
    if value is None:
        errors.append(ValidationIssue(IssueCode.NOT_A_NUMBER,
                                      f'{label} must be a valid number', name))
        return None
    low, high = bounds
    if value < low or value > high:
        errors.append(ValidationIssue(IssueCode.OUT_OF_RANGE,
                                      f'{label} must be between {low} and {high}', name))
        return None
    return value


def parse_bp_input(text):
    """Parse "systolic/diastolic[/heartRate]" into validated integers.

    Field errors are accumulated, so "10/20/30" reports all three ranges.
    """
    trimmed = (text or '').strip()
    if not trimmed:
        return ParseResult(errors=[ValidationIssue(IssueCode.EMPTY_INPUT, 'Input is empty')])

    parts = trimmed.split('/')
    if len(parts) not in (2, 3):
        return ParseResult(errors=[ValidationIssue(
            IssueCode.INVALID_FORMAT,
            'Invalid format. Expected: systolic/diastolic or systolic/diastolic/heartRate',
        )])

    errors = []
    values = [check_field(name, label, bounds, raw, errors)
              for (name, label, bounds), raw in zip(FIELDS, parts)]

    if errors:
        return ParseResult(errors=errors)

    systolic, diastolic = values[0], values[1]
    heart_rate = values[2] if len(values) == 3 else None
    return ParseResult(data=ParsedBPInput(systolic, diastolic, heart_rate))
