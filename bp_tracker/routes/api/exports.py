"""Reading export routes."""
from datetime import date
from flask import request, Response
from bp_tracker.utils.audit_logger import audit_log
from bp_tracker.utils.export import generate_readings_csv, export_filename
from bp_tracker.utils.validators import parse_date_param
from . import api_bp, get_store


@api_bp.route('/export', methods=['GET'])
def export_readings():
    """Export readings to CSV, optionally limited to [from, to] inclusive."""
    from_date = parse_date_param(request.args, 'from')
    to_date = parse_date_param(request.args, 'to')

    readings = get_store().between(from_date, to_date)
    csv_output = generate_readings_csv(readings)

    audit_log('EXPORT', 'readings_csv',
              details={
                  'count': len(readings),
                  'from_date': request.args.get('from'),
                  'to_date': request.args.get('to'),
              })

    return Response(
        csv_output,
        content_type='text/csv; charset=utf-8',
        headers={'Content-Disposition': f'attachment; filename="{export_filename(date.today())}"'}
    )
