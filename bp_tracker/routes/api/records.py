"""Reading create / list / fetch / delete routes."""
from flask import request, jsonify
from bp_tracker.errors import RecordNotFound
from bp_tracker.utils.audit_logger import audit_log, audit_access
from bp_tracker.utils.parser import parse_bp_input
from bp_tracker.utils.validators import (
    validate_reading, is_object_form, parse_recorded_at, parse_page_args, parse_record_id,
)
from . import api_bp, get_store, logger

BODY_HINT = [
    'Expected either "input" field (string format: "120/80/72")',
    'or "systolic", "diastolic", and "heartRate" fields',
]


@api_bp.route('/records', methods=['POST'])
def create_reading():
    """Submit a reading as shorthand ("120/80/72") or as separate fields."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Invalid request body', 'details': BODY_HINT}), 400

    if 'input' in data:
        if not isinstance(data['input'], str):
            return jsonify({'error': 'Invalid input format', 'details': ['Input must be a string']}), 400
        result = parse_bp_input(data['input'])
        if not result.success:
            return jsonify({'error': 'Invalid input format', 'details': result.messages}), 400
        parsed = result.data
    elif is_object_form(data):
        parsed, errors = validate_reading(data)
        if errors:
            return jsonify({'error': 'Invalid data', 'details': errors}), 400
    else:
        return jsonify({'error': 'Invalid request body', 'details': BODY_HINT}), 400

    notes = data.get('notes')
    if notes is not None and not isinstance(notes, str):
        notes = str(notes)

    recorded_at = None
    if data.get('recordedAt'):
        try:
            recorded_at = parse_recorded_at(data['recordedAt'])
        except ValueError:
            return jsonify({'error': 'Invalid recordedAt format'}), 400

    reading = get_store().create(
        parsed.systolic, parsed.diastolic, parsed.heart_rate,
        notes=notes, recorded_at=recorded_at,
    )
    logger.info(f'Created reading {reading.id}: {reading.systolic}/{reading.diastolic}')
    audit_log('CREATE', 'reading', resource_id=str(reading.id))

    return jsonify(reading.to_dict()), 201


@api_bp.route('/records', methods=['GET'])
def list_readings():
    """Newest-first readings with limit/offset pagination and a days filter."""
    limit, offset, days = parse_page_args(request.args)
    page = get_store().query(limit=limit, offset=offset, since_days=days)

    audit_log('READ', 'readings_list',
              details={'count': len(page.records), 'limit': limit, 'offset': offset, 'days': days})

    return jsonify({
        'records': [r.to_dict() for r in page.records],
        'total': page.total,
        'limit': limit,
        'offset': offset,
    }), 200


@api_bp.route('/records/<record_id>', methods=['GET'])
@audit_access('READ', 'reading')
def get_reading(record_id):
    reading = get_store().get_by_id(parse_record_id(record_id))
    if reading is None:
        raise RecordNotFound(record_id)
    return jsonify(reading.to_dict()), 200


@api_bp.route('/records/<record_id>', methods=['DELETE'])
def delete_reading(record_id):
    """Delete one reading. Unknown ids are a 404, not an error."""
    reading_id = parse_record_id(record_id)
    if not get_store().delete(reading_id):
        raise RecordNotFound(reading_id)

    audit_log('DELETE', 'reading', resource_id=str(reading_id))
    return jsonify({'success': True, 'message': 'Record deleted successfully'}), 200
