"""Leveled logger front end writing through a rotating LogWriter."""

import logging
from datetime import datetime

from rotlog.config import Config, validate
from rotlog.errors import IOFailure
from rotlog.levels import Level, Output, pad_level, parse_level, parse_output
from rotlog.rotator import Rotator
from rotlog.writer import LogWriter

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


class Logger:
    def __init__(self, config: Config, stream=None, time_func=None):
        validate(config)
        self._level = parse_level(config.level)
        self._output = parse_output(config.output)
        self._time_func = time_func or datetime.now

        rotator = None
        if self._output is Output.FILE:
            rotator = Rotator(config.policy())
        self._writer = LogWriter(self._output, rotator=rotator, stream=stream)

    @property
    def level(self) -> Level:
        return self._level

    @property
    def writer(self) -> LogWriter:
        return self._writer

    def enabled_for(self, level: Level) -> bool:
        return self._level >= level

    def format_line(self, level: Level, message: str) -> str:
        ts = self._time_func().strftime(TIMESTAMP_FORMAT)
        return f"{ts} {pad_level(level)} {message}"

    def log(self, level: Level, msg: str, *args) -> None:
        if not self.enabled_for(level):
            return
        try:
            message = msg % args if args else str(msg)
        except (TypeError, ValueError, KeyError) as e:
            logger.error("Cannot format log message %r with args %r: %s", msg, args, e)
            return
        try:
            self._writer.write(self.format_line(level, message))
        except IOFailure as e:
            # Never let a logging failure take down the caller.
            logger.error("Dropped log line: %s", e)

    def error(self, msg, *args):
        self.log(Level.ERROR, msg, *args)

    def warn(self, msg, *args):
        self.log(Level.WARN, msg, *args)

    def info(self, msg, *args):
        self.log(Level.INFO, msg, *args)

    def debug(self, msg, *args):
        self.log(Level.DEBUG, msg, *args)

    def trace(self, msg, *args):
        self.log(Level.TRACE, msg, *args)

    def tail(self, n: int) -> list[str]:
        """Last *n* lines written by this logger, across rotated files.

        Raises UnsupportedOperation when output is STDOUT.
        """
        return self._writer.tail(n)

    def close(self):
        self._writer.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def new_logger(config: Config, stream=None) -> Logger:
    return Logger(config, stream=stream)
