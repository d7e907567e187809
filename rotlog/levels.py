"""Log levels and output targets, with parsing from their config names."""

from enum import Enum, IntEnum

from rotlog.errors import ConfigError

LEVEL_WIDTH = 5


class Level(IntEnum):
    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3
    TRACE = 4


class Output(Enum):
    """Where log lines go. FILE is the only target that rotates."""

    STDOUT = "STDOUT"
    FILE = "FILE"


def parse_level(text: str) -> Level:
    try:
        return Level[text.strip().upper()]
    except (KeyError, AttributeError):
        raise ConfigError(f"Unknown log level: {text!r}") from None


def parse_output(text: str) -> Output:
    try:
        return Output(text.strip().upper())
    except (ValueError, AttributeError):
        raise ConfigError(f"Unknown output type: {text!r}") from None


def pad_level(level: Level) -> str:
    """Level name left-justified so messages line up (``WARN `` vs ``ERROR``)."""
    return level.name.ljust(LEVEL_WIDTH)
