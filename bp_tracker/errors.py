"""
Error taxonomy for readings.

Field-level problems (parser, object validation) are collected as
ValidationIssue values so a caller sees every problem at once. Request and
storage problems are exceptions: the first one wins.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from flask import jsonify

logger = logging.getLogger(__name__)


class IssueCode(enum.Enum):
    EMPTY_INPUT = 'empty_input'
    INVALID_FORMAT = 'invalid_format'
    NOT_A_NUMBER = 'not_a_number'
    OUT_OF_RANGE = 'out_of_range'


@dataclass(frozen=True)
class ValidationIssue:
    code: IssueCode
    message: str
    field: Optional[str] = None

    def __str__(self):
        return self.message


class BPTrackerError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidParameter(BPTrackerError):
    """A query parameter (limit, offset, days, id, date) is malformed or out of bounds."""

    def __init__(self, parameter, message):
        super().__init__(message)
        self.parameter = parameter


class RecordNotFound(BPTrackerError):
    status_code = 404

    def __init__(self, record_id, message='Record not found'):
        super().__init__(message)
        self.record_id = record_id


class PersistenceError(BPTrackerError):
    """The underlying database write or read failed."""
    status_code = 500


def register_error_handlers(app):
    """Map the error taxonomy onto JSON responses."""

    @app.errorhandler(BPTrackerError)
    def handle_bp_tracker_error(error):
        if error.status_code >= 500:
            logger.error(f'{type(error).__name__}: {error.message}', exc_info=error)
            return jsonify({'error': 'Internal server error'}), error.status_code
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def handle_internal_error(error):
        logger.exception('Unhandled error while serving request')
        return jsonify({'error': 'Internal server error'}), 500
