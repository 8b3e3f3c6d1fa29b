"""
Colored logging formatter for ts-model-typer.

Adds ANSI colors to console log output so the progress of a declaration
build is easy to follow in a terminal.
"""

import logging
import sys
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """
    Colored logging formatter that adds ANSI color codes to log messages.

    Different log levels get different colors for better visual distinction.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    # Special colors for specific messages
    SPECIAL_COLORS = {
        'success': '\033[92m',    # Bright Green
        'progress': '\033[94m',   # Bright Blue
        'highlight': '\033[96m',  # Bright Cyan
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    SUCCESS_INDICATORS = ('complete', 'successfully', 'generated', 'written', 'done', '✓')
    PROGRESS_INDICATORS = ('transforming', 'inspecting', 'rendering', 'loading', 'configuring', 'discovering', '→')
    HIGHLIGHT_INDICATORS = ('skipping', 'found', 'excluded', 'included', '•')

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string (uses default if None)
            use_colors: Whether to use colors (disabled automatically when stderr is not a TTY)
        """
        if fmt is None:
            fmt = "%(levelname)s: %(message)s"
        super().__init__(fmt)

        self.use_colors = use_colors and hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        formatted_message = super().format(record)
        if not self.use_colors:
            return formatted_message

        message = record.getMessage()

        # Errors and warnings always keep their level color
        if record.levelname in ('ERROR', 'CRITICAL', 'WARNING'):
            return f"{self.COLORS[record.levelname]}{formatted_message}{self.RESET}"

        if self._matches(message, self.SUCCESS_INDICATORS):
            return f"{self.SPECIAL_COLORS['success']}{self.BOLD}{formatted_message}{self.RESET}"
        if self._matches(message, self.PROGRESS_INDICATORS):
            return f"{self.SPECIAL_COLORS['progress']}{formatted_message}{self.RESET}"
        if self._matches(message, self.HIGHLIGHT_INDICATORS):
            return f"{self.SPECIAL_COLORS['highlight']}{formatted_message}{self.RESET}"
        if self._is_section_message(message):
            return f"{self.BOLD}{self.SPECIAL_COLORS['highlight']}{formatted_message}{self.RESET}"
        if record.levelname == 'DEBUG':
            return f"{self.COLORS['DEBUG']}{formatted_message}{self.RESET}"

        # Plain INFO stays uncolored
        return formatted_message

    @staticmethod
    def _matches(message: str, indicators) -> bool:
        message_lower = message.lower()
        return any(indicator in message_lower for indicator in indicators)

    @staticmethod
    def _is_section_message(message: str) -> bool:
        """Check if message is a section header."""
        return '=' in message and len(message.strip()) > 20


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Set up colored logging for the application.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    formatter = ColoredFormatter(use_colors=use_colors)

    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name (typically __name__)."""
    return logging.getLogger(name)


# Convenience functions for special message types
def log_success(logger: logging.Logger, message: str) -> None:
    """Log a success message with special formatting."""
    logger.info(f"✓ {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    """Log a progress message with special formatting."""
    logger.info(f"→ {message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    """Log a highlighted message with special formatting."""
    logger.info(f"• {message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a section header with special formatting."""
    separator = "=" * 60
    logger.info(f"\n{separator}")
    logger.info(f"  {section_name.upper()}")
    logger.info(f"{separator}")
