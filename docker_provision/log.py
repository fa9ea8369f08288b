#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Leveled, timestamped, colorized console logging"""

from typing import Optional, TextIO, Callable, Dict, Any, Tuple, Union

import sys
import datetime
from enum import Enum

from colorama import Fore, Style # type: ignore[import]

from .exceptions import FatalError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

class LogLevel(Enum):
  SUCCESS = 'success'
  TRACE = 'trace'
  DEBUG = 'debug'
  INFO = 'info'
  WARN = 'warn'
  ERROR = 'error'
  FATAL = 'fatal'

  @property
  def severity(self) -> int:
    return _severity[self]

  @classmethod
  def from_name(cls, name: Any) -> Optional['LogLevel']:
    """Returns the LogLevel named by name, or None if name is not a level name.

    Accepts a LogLevel or a case-insensitive string.
    """
    if isinstance(name, LogLevel):
      return name
    if not isinstance(name, str):
      return None
    try:
      return cls(name.lower())
    except ValueError:
      return None

_severity: Dict[LogLevel, int] = {
    LogLevel.TRACE: 0,
    LogLevel.DEBUG: 1,
    LogLevel.INFO: 2,
    LogLevel.SUCCESS: 3,
    LogLevel.WARN: 4,
    LogLevel.ERROR: 5,
    LogLevel.FATAL: 6,
  }

_level_style: Dict[LogLevel, str] = {
    LogLevel.SUCCESS: Fore.GREEN + Style.BRIGHT,
    LogLevel.TRACE: Style.DIM,
    LogLevel.DEBUG: Fore.CYAN,
    LogLevel.INFO: Fore.BLUE,
    LogLevel.WARN: Fore.YELLOW,
    LogLevel.ERROR: Fore.RED,
    LogLevel.FATAL: Fore.RED + Style.BRIGHT,
  }

def is_colorizable(stream: TextIO) -> bool:
  return hasattr(stream, 'isatty') and stream.isatty()

class Logger:
  """Writes lines of the form "<timestamp> [<LEVEL>]: <message>".

  A message logged at the 'fatal' level raises FatalError after it is
  written, which the command-line tool turns into exit status 1. Messages
  below min_level are dropped, except that 'error' and 'fatal' are always
  written.
  """
  _stream: Optional[TextIO]
  _colorize: Optional[bool]
  min_level: LogLevel
  clock: Callable[[], datetime.datetime]

  def __init__(
        self,
        stream: Optional[TextIO]=None,
        colorize: Optional[bool]=None,
        min_level: Union[LogLevel, str]=LogLevel.TRACE,
        clock: Optional[Callable[[], datetime.datetime]]=None,
      ):
    self._stream = stream
    self._colorize = colorize
    level = LogLevel.from_name(min_level)
    if level is None:
      raise ValueError(f"Unknown log level: {min_level!r}")
    self.min_level = level
    self.clock = datetime.datetime.now if clock is None else clock

  @property
  def stream(self) -> TextIO:
    # resolved lazily so that a stream wrapped by colorama after construction is honored
    return sys.stdout if self._stream is None else self._stream

  @property
  def colorize(self) -> bool:
    if self._colorize is None:
      return is_colorizable(self.stream)
    return self._colorize

  def is_enabled_for(self, level: LogLevel) -> bool:
    if level.severity >= LogLevel.ERROR.severity:
      return True
    return level.severity >= self.min_level.severity

  def format(self, level: LogLevel, message: str) -> str:
    timestamp = self.clock().strftime(TIMESTAMP_FORMAT)
    line = f"{timestamp} [{level.value.upper()}]: {message}"
    if self.colorize:
      line = f"{_level_style[level]}{line}{Style.RESET_ALL}"
    return line

  def log(self, *args: Any) -> None:
    """Logs a message.

    If the first argument names a log level, it is consumed as the level;
    otherwise the level is 'info' and every argument is message text.
    Message arguments are joined with a single space. An empty message
    produces no output.

    Raises:
        FatalError: The message was logged at the 'fatal' level.
    """
    level, message = split_level(args)
    if message == '':
      return
    if self.is_enabled_for(level):
      print(self.format(level, message), file=self.stream, flush=True)
    if level == LogLevel.FATAL:
      raise FatalError(message)

  def success(self, *args: Any) -> None:
    self.log(LogLevel.SUCCESS, *args)

  def trace(self, *args: Any) -> None:
    self.log(LogLevel.TRACE, *args)

  def debug(self, *args: Any) -> None:
    self.log(LogLevel.DEBUG, *args)

  def info(self, *args: Any) -> None:
    self.log(LogLevel.INFO, *args)

  def warn(self, *args: Any) -> None:
    self.log(LogLevel.WARN, *args)

  def error(self, *args: Any) -> None:
    self.log(LogLevel.ERROR, *args)

  def fatal(self, *args: Any) -> None:
    self.log(LogLevel.FATAL, *args)

def split_level(args: Tuple[Any, ...]) -> Tuple[LogLevel, str]:
  level = LogLevel.INFO
  if len(args) > 0:
    named = LogLevel.from_name(args[0])
    if not named is None:
      level = named
      args = args[1:]
  message = ' '.join(str(x) for x in args)
  return level, message
