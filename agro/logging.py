"""Structured logging setup shared by the API process and the CLI."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from agro.config import LogFormat, Settings, get_settings

_configured = False


def configure_structured_logging(settings: Settings | None = None, *, force: bool = False) -> None:
	"""Configure stdlib + structlog once per process (API server or CLI)."""
	global _configured
	if _configured and not force:
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
	shared_processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		timestamper,
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
