"""
CSV export of blood pressure readings.
"""
import csv
import io
import logging

from bp_tracker.models.reading import isoformat_utc

logger = logging.getLogger(__name__)

CSV_HEADERS = ['Date', 'Systolic', 'Diastolic', 'Heart Rate', 'Notes']


def _format_row(values):
    # QUOTE_MINIMAL with the default "\r\n" terminator quotes fields holding a
    # comma, a quote, "\r" or "\n", and doubles inner quotes. None -> ''.
    buffer = io.StringIO()
    csv.writer(buffer, quoting=csv.QUOTE_MINIMAL).writerow(values)
    return buffer.getvalue()[:-2]


def _timestamp(value):
    # Strings are written as stored; datetimes in the API's ISO form
    if value is None or isinstance(value, str):
        return value
    return isoformat_utc(value)


def generate_readings_csv(readings):
    """Generate CSV text for readings, in the order given.

    Args:
        readings: BloodPressureReading objects (or anything with the same attributes)

    Returns:
        str with a header row and one row per reading, joined with "\\n",
        without a trailing newline
    """
    lines = [_format_row(CSV_HEADERS)]

    for reading in readings:
        lines.append(_format_row([
            _timestamp(reading.recorded_at),
            reading.systolic,
            reading.diastolic,
            reading.heart_rate or None,
            reading.notes,
        ]))

    logger.debug(f'Generated CSV with {len(lines) - 1} reading(s)')
    return '\n'.join(lines)


def export_filename(today):
    """bp-records-YYYY-MM-DD.csv for the given date."""
    return f'bp-records-{today.strftime("%Y-%m-%d")}.csv'
