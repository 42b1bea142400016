"""Structured logging setup using structlog.

One shared processor chain (request context, log level, timestamps)
feeds either a coloured ConsoleRenderer for local development or a
JSONRenderer in production.  Standard-library ``logging`` goes through
the same chain, so uvicorn and the AI SDK loggers render like ours.

Request-scoped fields (``request_id``, ``path``) are bound with
:func:`bind_request_context` and merged into every event logged while the
request is handled.
"""

import logging
import sys
import uuid

import structlog

# SDK and transport loggers that are chatty at INFO (one line per HTTP call).
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def configure_logging(
    log_level: str = "INFO", json_output: bool = False, log_to_stderr: bool = False
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Render JSON lines instead of coloured console output.
        log_to_stderr: Write to stderr, keeping stdout free for program output.
    """
    stream = sys.stderr if log_to_stderr else sys.stdout
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        shared_processors.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to ``name``, configuring defaults if needed."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)


def bind_request_context(path: str, request_id: str | None = None) -> str:
    """Start a fresh log context for one request and return its id."""
    request_id = request_id or uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, path=path)
    return request_id
