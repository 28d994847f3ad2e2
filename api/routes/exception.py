"""
Centralized exception handling decorator for Logpush route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler so that no
failure reaches Logpush as a server error. A 5xx makes Logpush back off and
re-deliver the batch, so unexpected exceptions are logged and folded into a
``200`` response of the form ``{"ok": false, "error": "<message>"}``.
HTTPExceptions raised by the handler (bad body, auth) are propagated
untouched, preserving their status codes and detail messages.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from api.responses import FailureResponse

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def _failure(func: Callable[..., Any], exc: Exception) -> JSONResponse:
    log.error("%s threw %s", func.__name__, exc, exc_info=exc)
    body = FailureResponse(error=str(exc) or type(exc).__name__)
    return JSONResponse(status_code=200, content=body.model_dump())


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to acknowledged failures.

    * If the wrapped function raises :class:`HTTPException`, it is re-raised
      verbatim.
    * Any other exception is logged with its traceback and returned as a
      ``200`` JSON body with ``ok`` set to false.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                return _failure(func, exc)

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            return _failure(func, exc)

    return cast(F, sync_wrapper)
