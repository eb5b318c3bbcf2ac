"""UI configuration constants.

Centralizes key names, limits and labels for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


APP_NAME = "cablechat"

# Compose buffer
COMPOSE_CHAR_LIMIT = 80
COMPOSE_PLACEHOLDER = "Type something..."

# VIEW mode keys (matched on the typed character)
KEY_ENTER_COMPOSE = "i"
KEY_SCROLL_TOP = "g"
KEY_SCROLL_BOTTOM = "G"
KEYS_NAVIGATE_ROOMS = ("h", "H")
KEYS_LINE_DOWN = ("j", "down")
KEYS_LINE_UP = ("k", "up")

# COMPOSE mode keys (matched on the key name)
KEY_LEAVE_COMPOSE = "escape"
KEY_SUBMIT = "enter"

# Status line hints per mode
VIEW_HINT = "j↓ k↑ g/G top/bottom i(type) h(rooms)"
COMPOSE_HINT = "INSERT (esc)"

# Log panel
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages
