# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Miscellaneous utility functions"""

from typing import (
    Optional,
    List,
    Any,
    Generator,
  )

import os
import pwd
import grp
import platform
import threading

import yaml
from packaging import version

try:
  from yaml import CLoader as YamlLoader
except ImportError:
  from yaml import Loader as YamlLoader  #type: ignore[misc]

class _RunOnceState:
  has_run: bool = False
  result: Any = None
  lock: threading.Lock

  def __init__(self):
    self.lock = threading.Lock()

def run_once(func):
  """Function decorator that caches the result of the first call to a function.

  Useful for values read from the host that cannot change during a run. The
  decorator is thread safe--if multiple threads call the function at the same
  time before the first call has returned, they will block waiting for the
  result.

  Any arguments provided to the function are ignored after the first call.
  """
  state = _RunOnceState()

  def _run_once(*args, **kwargs) -> Any:
    if not state.has_run:
      with state.lock:
        if not state.has_run:
          state.result = func(*args, **kwargs)
          state.has_run = True
    return state.result
  return _run_once

def normalize_version(version_str: str) -> str:
  """Strips a leading 'v' and validates a release version string

  Raises:
      packaging.version.InvalidVersion: version_str is not a valid version
  """
  if version_str.startswith('v'):
    version_str = version_str[1:]
  return str(version.Version(version_str))

def searchpath_split(searchpath: Optional[str]=None) -> List[str]:
  if searchpath is None:
    searchpath = os.environ.get('PATH', os.defpath)
  result = [ x for x in searchpath.split(os.pathsep) if x != '' ]
  return result

def get_current_architecture() -> str:
  return platform.machine()

def get_current_system() -> str:
  return platform.system()

def file_contents(filename: str) -> str:
  with open(filename, encoding='utf-8') as f:
    result = f.read()
  return result

def load_yaml_file(filename: str) -> Any:
  with open(filename, encoding='utf-8') as f:
    result = yaml.load(f, Loader=YamlLoader)
  return result

def pathname_is_executable(pathname: str) -> bool:
  return os.path.isfile(pathname) and os.access(pathname, os.X_OK)

def find_commands_in_path(cmd: str, searchpath: Optional[str]=None) -> Generator[str, None, None]:
  cmd = os.path.expanduser(cmd)
  if os.path.sep in cmd or (not os.path.altsep is None and os.path.altsep in cmd):
    fq_cmd = os.path.abspath(cmd)
    if pathname_is_executable(fq_cmd):
      yield fq_cmd
    return
  for path_dir in searchpath_split(searchpath):
    fq_cmd = os.path.abspath(os.path.join(os.path.expanduser(path_dir), cmd))
    if pathname_is_executable(fq_cmd):
      yield fq_cmd

def find_command_in_path(cmd: str, searchpath: Optional[str]=None) -> Optional[str]:
  for fq_cmd in find_commands_in_path(cmd, searchpath=searchpath):
    return fq_cmd
  return None

def get_current_os_user() -> str:
  """Returns the name of the user who invoked this process.

  When run under sudo, this is the user that ran sudo rather than root.
  """
  sudo_user = os.environ.get('SUDO_USER')
  if not sudo_user is None and sudo_user != '' and sudo_user != 'root':
    return sudo_user
  try:
    return os.getlogin()
  except OSError:
    # no controlling terminal
    pass
  try:
    return pwd.getpwuid(os.getuid()).pw_name
  except KeyError:
    # uid has no passwd entry, common in containers
    return str(os.getuid())

def get_os_groups_of_user(user: str) -> List[str]:
  result: List[str] = []
  primary_gid: Optional[int] = None
  try:
    primary_gid = pwd.getpwnam(user).pw_gid
  except KeyError:
    pass
  for group in grp.getgrall():
    if user in group.gr_mem or group.gr_gid == primary_gid:
      result.append(group.gr_name)
  return sorted(result)

def atomic_mv(source: str, dest: str) -> None:
  """
  Renames source to dest, replacing dest if it exists. Atomic within the same volume.

  Args:
      source (str): Source file.
      dest (str): Destination file. Will be overwritten if it exists.
  """
  source = os.path.expanduser(source)
  dest = os.path.expanduser(dest)
  os.replace(source, dest)
