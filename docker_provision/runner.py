#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Execution of external commands (package manager, service manager, etc.)"""

from typing import TYPE_CHECKING, Optional, List, Sequence, Tuple, Any, cast

import shlex
import subprocess

from .exceptions import CalledProcessErrorWithStderrMessage
from .log import Logger

if TYPE_CHECKING:
  from subprocess import _ENV
else:
  _ENV = Any

def format_command(args: Sequence[str]) -> str:
  return ' '.join(shlex.quote(x) for x in args)

class CommandRunner:
  """Runs external commands synchronously, logging each one at debug level.

  Mutating commands inherit stdout/stderr so the tool's own output reaches the
  terminal; queries capture or discard their output.
  """
  log: Optional[Logger]
  env: Optional[_ENV]

  def __init__(self, log: Optional[Logger]=None, env: Optional[_ENV]=None):
    self.log = log
    self.env = env

  def _announce(self, args: Sequence[str], reason: Optional[str]=None) -> None:
    if not self.log is None:
      if reason is None:
        self.log.debug(f"Running: {format_command(args)}")
      else:
        self.log.debug(f"Running ({reason}): {format_command(args)}")

  def check_call(self, args: Sequence[str], reason: Optional[str]=None) -> int:
    """Runs a command, raising subprocess.CalledProcessError on non-zero exit."""
    self._announce(args, reason)
    return subprocess.check_call(list(args), env=self.env)

  def call(self, args: Sequence[str], quiet: bool=False) -> int:
    """Runs a command and returns its exit code. Never raises for non-zero exit."""
    self._announce(args)
    if quiet:
      return subprocess.call(list(args), stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, env=self.env)
    return subprocess.call(list(args), env=self.env)

  def check_output(self, args: Sequence[str]) -> str:
    """Runs a command and returns its stdout as text.

    Raises:
        CalledProcessErrorWithStderrMessage: the command exited non-zero; the
            exception message includes the command's stderr.
    """
    self._announce(args)
    arglist: List[str] = list(args)
    with subprocess.Popen(
          arglist,
          stdout=subprocess.PIPE,
          stderr=subprocess.PIPE,
          env=self.env,
        ) as proc:
      (stdout_bytes, stderr_bytes) = cast(Tuple[bytes, bytes], proc.communicate())
      exit_code = proc.returncode
    if exit_code != 0:
      stderr_s = stderr_bytes.decode('utf-8').rstrip()
      raise CalledProcessErrorWithStderrMessage(exit_code, arglist, stderr=stderr_s)
    return stdout_bytes.decode('utf-8')
