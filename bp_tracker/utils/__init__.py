from .parser import parse_bp_input
from .classifier import BPCategory, classify_bp
from .statistics import Trend, summarize
from .export import generate_readings_csv
from .audit_logger import audit_log, audit_access
