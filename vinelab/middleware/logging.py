"""structlog configuration and per-request logging for the lab-test API.

Every request gets a request id; lab-test routes also carry their test type in
the bound context, so service log lines can be grouped per soil or petiole call.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from vinelab.config import LogFormat, Settings, get_settings
from vinelab.models.enums import TestTypeEnum

_configured = False

_LAB_TEST_PATH = re.compile(r"/lab-tests/(?P<test_type>[^/]+)/")
_TEST_TYPES = frozenset(test_type.value for test_type in TestTypeEnum)


def configure_structured_logging(settings: Settings | None = None) -> None:
	"""Configure stdlib + structlog once per process."""
	global _configured
	if _configured:
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	shared_processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
	]

	if settings.log_format == LogFormat.json:
		renderer: Any = structlog.processors.JSONRenderer()
		logging.basicConfig(level=log_level, format="%(message)s")
	else:
		renderer = structlog.dev.ConsoleRenderer()
		logging.basicConfig(level=log_level)

	structlog.configure(
		processors=[
			*shared_processors,
			structlog.processors.format_exc_info,
			renderer,
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


def _lab_test_context(path: str) -> dict[str, str]:
	"""Domain fields readable from the URL alone, bound before the handler runs."""
	match = _LAB_TEST_PATH.search(path)
	if match is None or match.group("test_type") not in _TEST_TYPES:
		return {}
	return {"test_type": match.group("test_type")}


def _route_template(request: Request) -> str:
	route = request.scope.get("route")
	return getattr(route, "path", request.url.path)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind an ``x-request-id`` and the lab-test type to every request and log its timing."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
		request.state.request_id = request_id

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id, **_lab_test_context(request.url.path))

		logger = structlog.get_logger("vinelab.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			logger.exception(
				"lab_api_request_failed",
				method=request.method,
				route=_route_template(request),
				duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
				error=str(exc),
			)
			raise

		response.headers["x-request-id"] = request_id
		logger.info(
			"lab_api_request",
			method=request.method,
			route=_route_template(request),
			status_code=response.status_code,
			duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
		)
		return response
