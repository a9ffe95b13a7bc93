import logging
import sys
from pathlib import Path

from loguru import logger

from user_manager.runtime.config.config_data import ConfigData, LoggingConfig
from user_manager.runtime.context import get_config

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Third-party loggers held at WARNING unless something goes wrong
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "multipart", "httpx")


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Request logs come from the HTTP middleware
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # depth=2: stdlib -> this handler -> caller
        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, debug_traces: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if as_json else PLAIN_FORMAT,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=debug_traces,
        diagnose=debug_traces,
    )


def _route_stdlib_logging() -> None:
    # force=True drops handlers installed by uvicorn or earlier calls
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)


def configure_logging(config: ConfigData | None = None) -> None:
    """Install the Loguru sinks described by the ``logging`` config section.

    The console sink is always human readable. When ``logging.file`` is set a
    rotating file sink is added, serialized as JSON if ``logging.format`` is
    ``json``. Records from the standard ``logging`` module (uvicorn, SQLAlchemy)
    are forwarded to Loguru.
    """
    main_config = config or get_config()
    cfg = main_config.logging
    env = main_config.app.environment
    # Variable values in tracebacks can leak user data
    debug_traces = env != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"})

    logger.add(
        sys.stderr,
        level=cfg.level,
        format=PLAIN_FORMAT,
        colorize=sys.stderr.isatty(),
        backtrace=debug_traces,
        diagnose=debug_traces,
    )

    if cfg.file:
        _add_file_sink(cfg, debug_traces)

    _route_stdlib_logging()

    logger.bind(
        app_level=cfg.level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=env,
    ).info("Logging configured")
