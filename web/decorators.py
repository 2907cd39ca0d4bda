"""
Guards shared by the JSON API resources
"""

import logging
from functools import wraps

from flask_login import current_user
from flask_restx import Resource, abort
from sqlalchemy.orm.exc import StaleDataError
from werkzeug.exceptions import HTTPException

from core.accounts import resolve_team
from core.exceptions import ConflictError, PlaybookError
from core.models import db

logger = logging.getLogger(__name__)


def api_login_required(func):
    """401 instead of the login redirect used by the HTML pages"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401, "Unauthorized")
        return func(*args, **kwargs)

    return wrapper


def roles_required(*roles):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if current_user.role not in roles:
                abort(403, "Forbidden")
            return func(*args, **kwargs)

        return wrapper

    return decorator


def handle_service_errors(func):
    """Map domain errors to their status; anything else is a logged 500"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except PlaybookError as e:
            db.session.rollback()
            abort(e.status_code, str(e))
        except StaleDataError:
            db.session.rollback()
            logger.warning("Concurrent update rejected in %s", func.__name__)
            abort(ConflictError.status_code, "Play was modified by another request. Reload and retry.")
        except Exception:
            db.session.rollback()
            logger.exception("API Error in %s", func.__name__)
            abort(500, "Internal server error")

    return wrapper


def current_team():
    return resolve_team(current_user)


class SecuredResource(Resource):
    """Resource that needs a session; domain errors become JSON errors"""

    # Applied innermost first: the login check runs before anything else
    method_decorators = [handle_service_errors, api_login_required]
