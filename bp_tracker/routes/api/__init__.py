"""
Reading API routes.
"""
import logging
from flask import Blueprint, current_app

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


def get_store():
    """The ReadingStore owned by the current app."""
    return current_app.extensions['reading_store']


# Import submodules to register routes on api_bp
from . import records  # noqa: E402, F401
from . import stats    # noqa: E402, F401
from . import exports  # noqa: E402, F401
