"""
Logging for Elf Invaders.

Every module logs under the ``elf_invaders`` namespace:

    from elf_invaders.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Round started")
    logger.debug("Ignoring start in state PLAYING")

Nothing is printed or written until cli.main() calls setup_logging(); before
that, records propagate to the standard root logger (which is how pytest's
caplog sees them).

Levels (LOG_LEVEL in config.py, or --log-level):
    - DEBUG: State transitions, ignored commands, round resets
    - INFO: Round start and result, session start/stop (default)
    - WARNING: Commentary failures
    - ERROR: Errors only
"""

import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = 'elf_invaders'
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


class LogLevel(Enum):
    """Log levels accepted by setup_logging."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def from_name(cls, name: str) -> 'LogLevel':
        """Case-insensitive lookup, e.g. LogLevel.from_name('debug')."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


_configured = False
_session_file: Optional[Path] = None


class ColoredFormatter(logging.Formatter):
    """Colors the level name when writing to a terminal."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str = LOG_FORMAT, stream=None):
        super().__init__(fmt)
        stream = stream or sys.stdout
        self.enabled = hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self.enabled:
            return super().format(record)
        # Color a copy so other handlers keep the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelname, self.RESET)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _console_handler(level: LogLevel) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level.value)
    handler.setFormatter(ColoredFormatter(stream=sys.stdout))
    return handler


def _session_handler(log_dir: str, filename: Optional[str]) -> logging.FileHandler:
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    if filename is None:
        filename = f"session_{datetime.now():%Y%m%d_%H%M%S}.log"
    handler = logging.FileHandler(directory / filename, mode='a', encoding='utf-8')
    handler.setLevel(logging.DEBUG)  # file keeps everything
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(
    log_dir: str = 'logs',
    level: LogLevel = LogLevel.INFO,
    console_output: bool = True,
    file_output: bool = True,
    log_filename: Optional[str] = None,
) -> None:
    """
    Attach console and/or session-file handlers to the project logger.

    Calling it again is a no-op until reset_logging().

    Args:
        log_dir: Directory for session logs (created only if file_output)
        level: Console level; the file always records DEBUG
        console_output: Log to stdout
        file_output: Log to a session file
        log_filename: File name inside log_dir (default: session_YYYYMMDD_HHMMSS.log)
    """
    global _configured, _session_file

    if _configured:
        return

    project_logger = logging.getLogger(ROOT_LOGGER_NAME)
    project_logger.handlers.clear()
    project_logger.setLevel(logging.DEBUG if file_output else level.value)
    project_logger.propagate = False

    if console_output:
        project_logger.addHandler(_console_handler(level))
    if file_output:
        handler = _session_handler(log_dir, log_filename)
        _session_file = Path(handler.baseFilename)
        project_logger.addHandler(handler)
    if not project_logger.handlers:
        project_logger.addHandler(logging.NullHandler())

    _configured = True
    project_logger.info(f"Logging initialized (level={level.name}, file={file_output})")


def reset_logging() -> None:
    """Close and detach all project handlers so setup_logging can run again."""
    global _configured, _session_file

    project_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(project_logger.handlers):
        project_logger.removeHandler(handler)
        handler.close()
    project_logger.setLevel(logging.NOTSET)
    project_logger.propagate = True
    _configured = False
    _session_file = None


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the project namespace.

    Never configures handlers itself, so library code and tests can log
    before setup_logging() has run.

    Example:
        get_logger('elf_invaders.game.simulation').name == 'elf_invaders.game.simulation'
        get_logger('round').name == 'elf_invaders.round'
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def get_log_path() -> Optional[Path]:
    """Path of the current session log, or None when not writing one."""
    return _session_file


def log_round_summary(score: int, lives: int, won: bool, frames: int,
                      invaders_remaining: int) -> None:
    """Log one line per finished round: result, score, lives, frames, survivors."""
    fields = [
        "VICTORY" if won else "GAME OVER",
        f"score={score}",
        f"lives={lives}",
        f"frames={frames}",
        f"invaders_left={invaders_remaining}",
    ]
    get_logger('round').info(" | ".join(fields))
