#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from typing import Optional

from subprocess import CalledProcessError

class ProvisionError(Exception):
  """Base class for all error exceptions defined by this package."""

class ConfigError(ProvisionError):
  """The configuration file is missing, malformed, or contains invalid values."""

class DownloadError(ProvisionError):
  """A release binary could not be fetched."""

class CalledProcessErrorWithStderrMessage(CalledProcessError):
  def __str__(self):
    return super().__str__() + f": [{self.stderr}]"

class CmdExitError(RuntimeError):
  """An error that terminates the command with a specific exit code."""
  exit_code: int

  def __init__(self, exit_code: int=1, msg: Optional[str]=None):
    if msg is None:
      msg = f"Command exited with return code {exit_code}"
    super().__init__(msg)
    self.exit_code = exit_code

class FatalError(CmdExitError):
  """Raised after a message has been logged at the 'fatal' level."""

  def __init__(self, msg: Optional[str]=None):
    super().__init__(1, msg)

class UnknownOptionError(CmdExitError):
  """An unrecognized command-line token was provided."""

  def __init__(self, msg: Optional[str]=None):
    super().__init__(2, msg)

class StepFailedError(CmdExitError):
  """A provisioning step failed; exit_code is the failed command's exit status."""
  step_name: str

  def __init__(self, step_name: str, exit_code: int=1, msg: Optional[str]=None):
    if msg is None:
      msg = f"Provisioning step '{step_name}' failed with exit code {exit_code}"
    super().__init__(exit_code, msg)
    self.step_name = step_name
