"""
Shared failure handling for data-access calls: log, notify, then raise or fall back.
"""

import logging

from fastapi import HTTPException

from app.core.notifications import Notifier


def error_message(exc: Exception) -> str:
    """Backend error message; postgrest APIError carries it in .message"""
    message = getattr(exc, "message", None)
    return message if isinstance(message, str) and message else str(exc)


def report_failure(
    logger: logging.Logger,
    notifier: Notifier,
    title: str,
    exc: Exception,
    status_code: int = 500,
) -> HTTPException:
    """Log the failure and push a destructive notification.

    Returns the HTTPException to raise; call sites that fall back to an empty
    value simply ignore it.
    """
    message = error_message(exc)
    logger.error(f"{title}: {message}")
    notifier.error(title, message)
    return HTTPException(status_code=status_code, detail=message)
