#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""The host facts a provisioning run depends on, gathered in one place"""

from typing import Optional, Dict, Callable, List, NamedTuple

import os

from .runner import CommandRunner
from .util import (
    file_contents,
    get_current_architecture,
    get_current_os_user,
    get_current_system,
    get_os_groups_of_user,
    searchpath_split,
  )

class OsIdentity(NamedTuple):
  distro_id: str
  version_id: str

def parse_os_release(text: str) -> Dict[str, str]:
  """Parses the KEY=VALUE lines of an os-release file. Quotes are stripped; comments and
  blank lines are ignored."""
  result: Dict[str, str] = {}
  for line in text.splitlines():
    line = line.strip()
    if line == '' or line.startswith('#') or not '=' in line:
      continue
    key, value = line.split('=', 1)
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
      value = value[1:-1]
    result[key.strip()] = value
  return result

def read_os_identity(os_release_file: str='/etc/os-release') -> Optional[OsIdentity]:
  """Returns the (ID, VERSION_ID) pair from an os-release file, or None if the file does
  not exist."""
  if not os.path.exists(os_release_file):
    return None
  fields = parse_os_release(file_contents(os_release_file))
  return OsIdentity(fields.get('ID', ''), fields.get('VERSION_ID', ''))

class ExecutionContext:
  """Everything a provisioning step needs to know about the host.

  Steps never read the process environment directly; they consult the
  context, so tests can substitute synthetic hosts.
  """
  euid: int
  os_identity: Optional[OsIdentity]
  user: str
  system: str
  machine: str
  search_path: str
  runner: CommandRunner
  group_lookup: Callable[[str], List[str]]

  def __init__(
        self,
        euid: int,
        os_identity: Optional[OsIdentity],
        user: str,
        system: str,
        machine: str,
        search_path: str,
        runner: CommandRunner,
        group_lookup: Optional[Callable[[str], List[str]]]=None,
      ):
    self.euid = euid
    self.os_identity = os_identity
    self.user = user
    self.system = system
    self.machine = machine
    self.search_path = search_path
    self.runner = runner
    self.group_lookup = get_os_groups_of_user if group_lookup is None else group_lookup

  @property
  def is_root(self) -> bool:
    return self.euid == 0

  def groups_of_user(self) -> List[str]:
    return self.group_lookup(self.user)

  @classmethod
  def from_host(
        cls,
        runner: Optional[CommandRunner]=None,
        os_release_file: str='/etc/os-release',
      ) -> 'ExecutionContext':
    if runner is None:
      runner = CommandRunner()
    return cls(
        euid=os.geteuid(),
        os_identity=read_os_identity(os_release_file),
        user=get_current_os_user(),
        system=get_current_system(),
        machine=get_current_architecture(),
        search_path=os.pathsep.join(searchpath_split()),
        runner=runner,
      )
