"""
Input validation for reading submissions and query parameters.
"""
import re
from datetime import datetime

from bp_tracker.errors import InvalidParameter
from bp_tracker.store import DEFAULT_LIMIT
from bp_tracker.utils.parser import FIELDS, ParsedBPInput, check_field

_INT_RE = re.compile(r'-?\d+')
_DATE_RE = re.compile(r'\d{4}-\d{2}-\d{2}')
_ID_RE = re.compile(r'\d+')


def validate_reading(data: dict):
    """Validate the object form {systolic, diastolic, heartRate}.

    Returns (ParsedBPInput or None, list of error strings). heartRate may be
    null for "not recorded"; every other field error is collected.
    """
    errors = []
    raw = {
        'systolic': data.get('systolic'),
        'diastolic': data.get('diastolic'),
        'heart_rate': data.get('heartRate'),
    }

    values = {}
    for name, label, bounds in FIELDS:
        if name == 'heart_rate' and raw[name] is None:
            values[name] = None
            continue
        values[name] = check_field(name, label, bounds, raw[name], errors)

    if errors:
        return None, [issue.message for issue in errors]
    return ParsedBPInput(values['systolic'], values['diastolic'], values['heart_rate']), []


def is_object_form(data: dict) -> bool:
    """True when systolic, diastolic and heartRate keys are all present."""
    return (data.get('systolic') is not None
            and data.get('diastolic') is not None
            and 'heartRate' in data)


def parse_recorded_at(value):
    """Parse an ISO-8601 timestamp ("Z" allowed). Raises ValueError."""
    if not isinstance(value, str):
        raise ValueError('recordedAt must be a string')
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


def _int_param(args, name, default, message):
    raw = args.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not _INT_RE.fullmatch(raw):
        raise InvalidParameter(name, message)
    return int(raw)


def parse_page_args(args):
    """Read limit, offset and days from request args.

    Non-integer strings raise InvalidParameter here; bounds are checked by
    ReadingStore.query.
    """
    limit = _int_param(args, 'limit', DEFAULT_LIMIT,
                       message='Invalid limit. Must be between 1 and 1000')
    offset = _int_param(args, 'offset', 0,
                        message='Invalid offset. Must be a non-negative integer')
    days = _int_param(args, 'days', None,
                      message='Invalid days. Must be a positive integer')
    return limit, offset, days


def parse_record_id(raw: str) -> int:
    """A record id must be a positive whole number, e.g. "12" but not "1.5" or "0"."""
    if not raw or not _ID_RE.fullmatch(raw) or int(raw) < 1:
        raise InvalidParameter('id', 'Invalid record ID')
    return int(raw)


def parse_date_param(args, name):
    """Parse a YYYY-MM-DD query parameter that must be a real calendar date."""
    raw = args.get(name)
    if raw is None:
        return None
    message = f'Invalid {name} date format. Expected: YYYY-MM-DD'
    if not _DATE_RE.fullmatch(raw):
        raise InvalidParameter(name, message)
    try:
        return datetime.strptime(raw, '%Y-%m-%d').date()
    except ValueError:
        raise InvalidParameter(name, message)
