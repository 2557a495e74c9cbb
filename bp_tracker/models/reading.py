"""
Blood Pressure Reading model.
"""
from datetime import datetime, timezone
from bp_tracker import db


def utcnow():
    """Current time as a naive UTC datetime, the form stored in recorded_at."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat_utc(value):
    """Serialize a naive UTC datetime as 2024-01-15T08:00:00.000Z."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f'{value.microsecond // 1000:03d}Z'


class BloodPressureReading(db.Model):
    """
    A single blood pressure reading.

    heart_rate is NOT NULL in storage; 0 means "not recorded". Everything
    above the store sees None for that case (see heart_rate_or_none).
    """
    __tablename__ = 'bp_records'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    systolic = db.Column(db.Integer, nullable=False)
    diastolic = db.Column(db.Integer, nullable=False)
    heart_rate = db.Column(db.Integer, nullable=False, default=0)

    recorded_at = db.Column(db.DateTime, default=utcnow,
                            server_default=db.func.current_timestamp(), index=True)
    notes = db.Column(db.Text, nullable=True)

    __table_args__ = {'sqlite_autoincrement': True}

    @property
    def has_heart_rate(self):
        return bool(self.heart_rate)

    @property
    def heart_rate_or_none(self):
        return self.heart_rate if self.heart_rate else None

    def to_dict(self):
        return {
            'id': self.id,
            'systolic': self.systolic,
            'diastolic': self.diastolic,
            'heart_rate': self.heart_rate_or_none,
            'recorded_at': isoformat_utc(self.recorded_at),
            'notes': self.notes,
        }

    def __repr__(self):
        return f'<BloodPressureReading {self.id}: {self.systolic}/{self.diastolic}>'
