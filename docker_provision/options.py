#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Command-line install options"""

from typing import Optional, Sequence

from enum import Enum

from .exceptions import UnknownOptionError
from .log import Logger

COMPOSE_FLAG = '--compose'

class InstallOption(Enum):
  DOCKER = 'docker'
  DOCKER_AND_COMPOSE = 'docker+compose'

  @property
  def with_compose(self) -> bool:
    return self == InstallOption.DOCKER_AND_COMPOSE

def parse_install_option(
      tokens: Sequence[str],
      strict: bool=True,
      log: Optional[Logger]=None,
    ) -> InstallOption:
  """Determines what to install from the tokens left over after global options are parsed.

  No tokens selects Docker only; a single "--compose" selects Docker and
  docker-compose.

  Args:
      tokens (Sequence[str]): The remaining command-line tokens.
      strict (bool, optional): If False, unrecognized tokens are ignored with a warning and
                       only the first token is examined, matching the historical behavior of
                       the provisioning script. Defaults to True.
      log (Optional[Logger], optional): Where to warn about ignored tokens. Defaults to None.

  Raises:
      UnknownOptionError: strict is True and a token other than a single "--compose" was given.

  Returns:
      InstallOption: The selected option.
  """
  if len(tokens) == 0:
    return InstallOption.DOCKER
  if strict:
    unknown = [ x for x in tokens if x != COMPOSE_FLAG ]
    if len(unknown) > 0:
      raise UnknownOptionError(f"unrecognized arguments: {' '.join(unknown)}")
    if len(tokens) > 1:
      raise UnknownOptionError(f"{COMPOSE_FLAG} may only be given once")
    return InstallOption.DOCKER_AND_COMPOSE
  if len(tokens) > 1 or tokens[0] != COMPOSE_FLAG:
    if not log is None:
      ignored = tokens[1:] if tokens[0] == COMPOSE_FLAG else tokens
      log.warn(f"Ignoring unrecognized arguments: {' '.join(ignored)}")
  if tokens[0] == COMPOSE_FLAG:
    return InstallOption.DOCKER_AND_COMPOSE
  return InstallOption.DOCKER

def reject_extra_arguments(tokens: Sequence[str]) -> None:
  if len(tokens) > 0:
    raise UnknownOptionError(f"unrecognized arguments: {' '.join(tokens)}")
