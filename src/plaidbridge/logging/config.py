"""Logging configuration for plaidbridge.

Commands log bare messages to stderr so that printed output (such as a
sandbox access token) stays clean on stdout. The passthrough server logs
timestamped records and folds uvicorn's own loggers into the same handlers,
so request errors and Plaid failures end up in one stream and one log file.
"""

import logging
import os
import sys
from dataclasses import dataclass, replace
from logging.handlers import RotatingFileHandler
from pathlib import Path

UVICORN_LOGGERS: tuple[str, ...] = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Libraries whose INFO output drowns out ours
_NOISY_LOGGERS: dict[str, int] = {
    "urllib3": logging.WARNING,
    "plaid": logging.INFO,
}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class LoggingConfig:
    """Configuration settings for application logging."""

    level: str = "INFO"
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    cli_format_string: str = "%(message)s"
    log_to_file: bool = True
    log_file_path: Path = Path("logs/plaidbridge.log")
    max_file_size_mb: int = 10
    backup_count: int = 3
    access_log: bool = False
    force_reconfigure: bool = False

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        """Read LOG_* environment variables.

        Returns:
            LoggingConfig: Configuration loaded from environment
        """
        defaults = cls()
        return cls(
            level=os.getenv("LOG_LEVEL", defaults.level).upper(),
            log_to_file=_env_flag("LOG_TO_FILE", defaults.log_to_file),
            log_file_path=Path(os.getenv("LOG_FILE_PATH", str(defaults.log_file_path))),
            max_file_size_mb=int(
                os.getenv("LOG_MAX_FILE_SIZE_MB", str(defaults.max_file_size_mb))
            ),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", str(defaults.backup_count))),
            access_log=_env_flag("LOG_ACCESS", defaults.access_log),
        )


def _build_handlers(config: LoggingConfig, cli_mode: bool) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(
        logging.Formatter(config.cli_format_string if cli_mode else config.format_string)
    )
    handlers: list[logging.Handler] = [console]

    if config.log_to_file:
        config.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            config.log_file_path,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        rotating.setFormatter(logging.Formatter(config.format_string))
        handlers.append(rotating)

    return handlers


def setup_logging(
    config: LoggingConfig | None = None,
    cli_mode: bool = False,
    verbose: bool = False,
) -> None:
    """Install console and file handlers on the root logger.

    Args:
        config: Optional logging configuration. If None, loads from environment.
        cli_mode: If True, console lines carry only the message
        verbose: If True, enable DEBUG level logging (overrides config level)
    """
    if config is None:
        config = LoggingConfig.from_environment()

    level = logging.DEBUG if verbose else getattr(logging, config.level, logging.INFO)

    logging.basicConfig(
        level=level,
        handlers=_build_handlers(config, cli_mode),
        force=config.force_reconfigure,
    )

    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


def setup_server_logging(
    config: LoggingConfig | None = None, verbose: bool = False
) -> None:
    """Configure logging for the passthrough server.

    Handlers installed earlier in the process (the CLI callback runs first)
    are replaced with timestamped ones, and uvicorn's loggers are emptied so
    their records propagate to them. Per-request access lines are kept only
    when LOG_ACCESS is enabled.

    Args:
        config: Optional logging configuration. If None, loads from environment.
        verbose: If True, enable DEBUG level logging
    """
    if config is None:
        config = LoggingConfig.from_environment()

    setup_logging(replace(config, force_reconfigure=True), verbose=verbose)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    logging.getLogger("uvicorn.access").setLevel(
        logging.INFO if config.access_log else logging.WARNING
    )
