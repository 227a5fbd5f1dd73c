"""
Structured console logger

One line per event, tagged with a category and a level symbol, followed
by an optional tree of key/value details:

    [14:23:45] TIMING    ✓ Loop state changed
               ├─ overlay: cta
               └─ state: entering → visible

Modules bind a category once at import time:

    log = get_logger().for_category(LogCategory.TIMING)

and instances that log a lot bind their own context on top of it:

    self.log = log.bind(overlay=self.name)
"""

import sys
import traceback
from datetime import datetime
from typing import Any, Dict, List, Optional

from models.enums import LogLevel, LogCategory

RESET = '\033[0m'
DIM = '\033[2m'

# Category label column width; longer names overflow
CATEGORY_WIDTH = 9
DETAIL_INDENT = " " * 11

# Levels in ascending severity
LEVEL_ORDER = [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR]

# (symbol, ANSI color) per level
LEVEL_STYLES = {
    LogLevel.DEBUG: ('·', DIM),
    LogLevel.INFO: ('✓', '\033[32m'),
    LogLevel.WARN: ('⚠', '\033[33m'),
    LogLevel.ERROR: ('✗', '\033[31m'),
}

CATEGORY_COLORS = {
    LogCategory.CONFIG: '\033[36m',
    LogCategory.RESOLVER: '\033[96m',
    LogCategory.PALETTE: '\033[95m',
    LogCategory.TIMING: '\033[93m',
    LogCategory.SEQUENCE: '\033[92m',
    LogCategory.EFFECT: '\033[35m',
    LogCategory.OVERLAY: '\033[94m',
    LogCategory.RENDER_ENGINE: '\033[35m',
    LogCategory.API: '\033[34m',
    LogCategory.SYSTEM: '\033[97m',
    LogCategory.TASK: '\033[37m',
    LogCategory.SHUTDOWN: '\033[31m',
}
DEFAULT_COLOR = '\033[37m'


def format_details(details: Optional[List[str]], fields: Dict[str, Any], exc_info: bool) -> List[str]:
    """Detail lines: free-form strings, then key/value fields, then the active traceback"""
    lines = list(details or [])
    lines.extend(f"{key}: {value}" for key, value in fields.items())
    if exc_info and sys.exc_info()[0] is not None:
        lines.extend(traceback.format_exc().strip().splitlines())
    return lines


class Logger:
    """
    Category logger writing to stdout

    Args:
        min_level: Lowest level that is printed
        use_colors: ANSI colors (off for files and captured output)
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        self.min_level = min_level
        self.use_colors = use_colors

    def enabled(self, level: LogLevel) -> bool:
        return LEVEL_ORDER.index(level) >= LEVEL_ORDER.index(self.min_level)

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_colors else text

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[List[str]] = None,
        exc_info: bool = False,
        **fields: Any,
    ) -> None:
        """
        Print one event

        Example:
            logger.log(LogCategory.PALETTE, "Unknown gradient, using default",
                       name="sunrise", fallback="indigo")
        """
        if not self.enabled(level):
            return

        symbol, level_color = LEVEL_STYLES[level]
        label = self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, DEFAULT_COLOR))
        stamp = datetime.now().strftime('[%H:%M:%S]')
        print(f"{stamp} {label} {self._paint(symbol, level_color)} {self._paint(message, level_color)}")

        lines = format_details(details, fields, exc_info)
        for i, line in enumerate(lines):
            branch = "└─" if i == len(lines) - 1 else "├─"
            print(f"{DETAIL_INDENT}{self._paint(branch, DIM)} {line}")

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed category and optional context fields added to every event"""

    def __init__(self, base: Logger, category: LogCategory, context: Optional[Dict[str, Any]] = None):
        self._base = base
        self._category = category
        self._context = dict(context or {})

    @property
    def category(self) -> LogCategory:
        return self._category

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self._context)

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        fields = {**self._context, **kw}
        self._base.log(category or self._category, message, level, **fields)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category, self._context)

    def bind(self, **context: Any) -> 'BoundLogger':
        """Same category, extra context fields (later keys win)"""
        return BoundLogger(self._base, self._category, {**self._context, **context})


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True) -> None:
    """
    Configure the logger singleton in place

    Bound loggers created at import time hold a reference to the singleton,
    so it is mutated rather than replaced.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
