import logging as stdlib_logging
import os
from contextvars import ContextVar
from contextvars import Token
from typing import TextIO

import structlog
from rich.console import Console
from rich.traceback import Traceback
from structlog.types import EventDict
from structlog.types import ExcInfo
from structlog.types import Processor
from structlog.types import WrappedLogger


_ROOT_LOGGER = stdlib_logging.getLogger()

_BEATMAP_ID_CONTEXT: ContextVar[int | None] = ContextVar("beatmap_id")


def set_beatmap_id(beatmap_id: int | None) -> Token[int | None]:
    return _BEATMAP_ID_CONTEXT.set(beatmap_id)


def reset_beatmap_id(token: Token[int | None]) -> None:
    """Restore whichever beatmap id was bound before `token` was created."""
    _BEATMAP_ID_CONTEXT.reset(token)


def get_beatmap_id() -> int | None:
    return _BEATMAP_ID_CONTEXT.get(None)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.wrap_logger(_ROOT_LOGGER, logger_name=name or "root")


def log_as_text(app_env: str) -> bool:
    return app_env == "local"


def add_process_id(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    event_dict["process_id"] = os.getpid()
    return event_dict


def add_beatmap_id(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    beatmap_id = _BEATMAP_ID_CONTEXT.get(None)
    if beatmap_id is not None and "beatmap_id" not in event_dict:
        event_dict["beatmap_id"] = beatmap_id

    return event_dict


# https://github.com/hynek/structlog/issues/35#issuecomment-591321744
def rename_event_key(_, __, event_dict: EventDict) -> EventDict:
    """
    Log entries keep the text message in the `event` field, but our log
    aggregation uses the `message` field. This processor moves the value
    from one field to the other.
    """
    event_dict["message"] = event_dict.pop("event")
    return event_dict


def rich_traceback(sio: TextIO, exc_info: ExcInfo) -> None:
    """
    We overwrite the default version of this in structlog to set the `max_frames` to 10.

    Failures are wrapped once per beatmap, so the interesting frames are the
    last few inside the ruleset's calculator or the database driver.
    """
    sio.write("\n")
    Console(file=sio, color_system="truecolor").print(
        Traceback.from_exception(*exc_info, show_locals=True, max_frames=10)
    )


def configure_logging(app_env: str, log_level: str | int) -> None:
    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_process_id,
        add_beatmap_id,
    ]

    if log_as_text(app_env):
        log_renderer = structlog.dev.ConsoleRenderer(exception_formatter=rich_traceback)
    else:
        log_renderer = structlog.processors.JSONRenderer()

        shared_processors.append(rename_event_key)

        # format the exception only when using the json renderer
        # we want to pretty-print the exception when logging as text
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=(
            shared_processors
            # prepare for `ProcessorFormatter`
            + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter]
        ),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = stdlib_logging.StreamHandler()
    handler.setFormatter(formatter)

    _ROOT_LOGGER.addHandler(handler)
    _ROOT_LOGGER.setLevel(log_level)

    # the database drivers are chatty at debug level
    for _logger in ("databases", "asyncpg"):
        stdlib_logging.getLogger(_logger).setLevel(stdlib_logging.WARNING)


def debug(*args, **kwargs) -> None:
    return get_logger().debug(*args, **kwargs)


def info(*args, **kwargs) -> None:
    return get_logger().info(*args, **kwargs)


def warning(*args, **kwargs) -> None:
    return get_logger().warning(*args, **kwargs)


def error(*args, **kwargs) -> None:
    return get_logger().error(*args, **kwargs)


def critical(*args, **kwargs) -> None:
    return get_logger().critical(*args, **kwargs)
