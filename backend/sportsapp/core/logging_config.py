"""
SportsApp logging.

Development gets compact text lines, production gets one JSON object per line.
Every record carries the current request id and acting user (a user id, or
``admin:<name>`` for the admin session) through a logging filter.
"""

import json
import logging
import sys
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from sportsapp.core.config import settings


_request_id: ContextVar[str] = ContextVar("request_id", default="")
_user_id: ContextVar[str] = ContextVar("user_id", default="")

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def set_user_id(user_id: str) -> None:
    _user_id.set(user_id)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestContextFilter(logging.Filter):
    """Stamps request_id and user_id on each record ("-" when unset)"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        record.user_id = _user_id.get() or "-"
        return True


# Attributes every LogRecord has; anything else came in through ``extra``
_STANDARD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """One JSON document per record, with extra fields merged at the top level"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(
            (key, value) for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_") and value != "-"
        )

        if record.exc_info and record.exc_info[0]:
            exc_type, exc_value, exc_tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        return json.dumps(payload, default=str)


class SportsAppLogger(logging.Logger):
    """Logger with helpers for the events the API emits"""

    def _event(self, level: int, message: str, event_type: str,
               exc_info: bool = False, **fields: Any) -> None:
        self.log(level, message, exc_info=exc_info, extra={"event_type": event_type, **fields})

    def log_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, **kwargs) -> None:
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        self._event(
            level, f"{method} {path} -> {status_code} ({duration_ms:.1f}ms)", "http_request",
            http_method=method, http_path=path, http_status=status_code,
            duration_ms=round(duration_ms, 2), **kwargs
        )

    def log_auth_event(self, event: str, success: bool, username: Optional[str] = None,
                       reason: Optional[str] = None, **kwargs) -> None:
        """User or admin sign-in activity; failures are warnings"""
        outcome = "ok" if success else f"failed ({reason or 'unknown'})"
        self._event(
            logging.INFO if success else logging.WARNING,
            f"auth.{event} {username or '?'}: {outcome}", "auth",
            auth_event=event, auth_success=success, auth_username=username,
            failure_reason=reason, **kwargs
        )

    def log_moderation_event(self, action: str, target_type: str,
                             target_id: Any, admin: Optional[str] = None, **kwargs) -> None:
        """Admin decisions: deletions, reviews, verifications, payouts"""
        self._event(
            logging.INFO, f"moderation.{action} {target_type}#{target_id} by {admin or 'admin'}",
            "moderation", moderation_action=action, target_type=target_type,
            target_id=target_id, admin=admin, **kwargs
        )

    def log_error_with_context(self, error: Exception, context: Optional[str] = None,
                               **kwargs) -> None:
        self._event(
            logging.ERROR, f"Unhandled {type(error).__name__} in {context or 'unknown'}: {error}",
            "error", exc_info=True, error_type=type(error).__name__,
            error_message=str(error), error_context=context, **kwargs
        )

    def log_performance(self, operation: str, duration_ms: float,
                        threshold_ms: float = 1000, **kwargs) -> None:
        slow = duration_ms > threshold_ms
        self._event(
            logging.WARNING if slow else logging.DEBUG,
            f"slow: {operation} took {duration_ms:.0f}ms (limit {threshold_ms:.0f}ms)" if slow
            else f"{operation} took {duration_ms:.0f}ms",
            "performance", operation=operation, duration_ms=round(duration_ms, 2),
            threshold_ms=threshold_ms, exceeded_threshold=slow, **kwargs
        )


def setup_logging() -> SportsAppLogger:
    """Configure the "sportsapp" logger for the current environment"""
    logging.setLoggerClass(SportsAppLogger)
    app_logger = logging.getLogger("sportsapp")
    app_logger.__class__ = SportsAppLogger
    app_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    app_logger.handlers.clear()
    app_logger.propagate = False

    json_logs = settings.ENVIRONMENT == "production"
    if json_logs:
        console_format = file_format = JSONFormatter()
    else:
        console_format = logging.Formatter("%(levelname)-7s [%(request_id)s] %(message)s")
        file_format = logging.Formatter(
            "%(asctime)s %(levelname)-7s [%(request_id)s|%(user_id)s] "
            "%(module)s:%(lineno)d %(message)s"
        )

    handlers = [(logging.StreamHandler(sys.stdout), console_format, logging.INFO)]
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            log_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=10 if json_logs else 5
        )
        handlers.append((rotating, file_format, logging.DEBUG))

    for handler, formatter, level in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(RequestContextFilter())
        app_logger.addHandler(handler)

    for noisy in ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    app_logger.debug("Logging ready", extra={"environment": settings.ENVIRONMENT, "json_logs": json_logs})
    return app_logger


logger: SportsAppLogger = setup_logging()
