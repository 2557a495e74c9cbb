"""Summary statistics and chart routes."""
from flask import request, jsonify
from bp_tracker.store import MAX_LIMIT
from bp_tracker.utils.audit_logger import audit_log
from bp_tracker.utils.statistics import summarize, chart_series
from bp_tracker.utils.validators import parse_page_args
from . import api_bp, get_store


@api_bp.route('/stats', methods=['GET'])
def get_stats():
    """Averages, latest reading with its category, date range and trend."""
    limit, offset, days = parse_page_args(request.args)
    page = get_store().query(limit=limit, offset=offset, since_days=days)
    stats = summarize(page.records)

    audit_log('READ', 'reading_stats', details={'count': stats.count, 'days': days})

    return jsonify(stats.to_dict()), 200


@api_bp.route('/chart', methods=['GET'])
def get_chart():
    """Oldest-first points for the trend chart (up to the most recent 1000 readings)."""
    _, _, days = parse_page_args(request.args)
    page = get_store().query(limit=MAX_LIMIT, since_days=days)

    audit_log('READ', 'reading_chart', details={'count': len(page.records), 'days': days})

    return jsonify({'points': chart_series(page.records)}), 200
