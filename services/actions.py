# services/actions.py
import functools
import logging

from utils.exceptions import AttendanceError

logger = logging.getLogger(__name__)


def action(func):
    """
    Turn a coroutine into a user-facing action.

    The wrapped call never raises: business-rule rejections become
    ``{"success": False, "error": ..., "code": ...}`` and successful payloads are
    merged into ``{"success": True, ...}``.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            payload = await func(*args, **kwargs)
        except AttendanceError as e:
            logger.warning("%s rejected: %s [%s]", func.__name__, e.message, e.code)
            return {"success": False, "error": e.message, "code": e.code}
        except Exception as e:
            logger.exception("%s failed", func.__name__)
            return {"success": False, "error": str(e), "code": "InternalError"}
        return {"success": True, **(payload or {})}

    return wrapper
