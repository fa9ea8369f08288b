#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""ProvisionConfig class definition"""

from typing import Optional, Dict, Any

import os

import yaml
from packaging.version import InvalidVersion

from .exceptions import ConfigError
from .log import LogLevel
from .util import load_yaml_file, normalize_version

DOCKER_INSTALL_METHODS = ( 'extras', 'yum' )

class ProvisionConfig:
  """Tunable constants for a provisioning run.

  The defaults provision Docker on Amazon Linux 2. Any of them may be
  overridden from a YAML mapping with the same keys.
  """
  expected_distro_id: str = 'amzn'
  expected_version_id: str = '2'
  os_release_file: str = '/etc/os-release'
  extras_helper: str = 'amazon-linux-extras'
  extras_helper_package: str = 'amazon-linux-extras'
  docker_package: str = 'docker'
  docker_install_method: str = 'extras'
  docker_service: str = 'docker'
  docker_group: str = 'docker'
  compose_path: str = '/usr/local/bin/docker-compose'
  compose_version: str = 'latest'
  strict_options: bool = False
  log_level: str = 'trace'

  config_file: Optional[str] = None

  def __init__(self, config_file: Optional[str]=None, **overrides: Any):
    data: Dict[str, Any] = {}
    if not config_file is None:
      self.config_file = os.path.abspath(os.path.normpath(os.path.expanduser(config_file)))
      data.update(read_config_file(self.config_file))
    data.update(overrides)
    for key, value in data.items():
      self._set(key, value)
    self._validate()

  def _set(self, key: str, value: Any) -> None:
    if key == 'config_file' or not key in _config_keys:
      raise ConfigError(f"Unknown configuration key: {key!r}")
    expected_type = type(getattr(ProvisionConfig, key))
    if expected_type is str and isinstance(value, int) and not isinstance(value, bool):
      # YAML reads "version_id: 2" as an int
      value = str(value)
    if expected_type is str and isinstance(value, float):
      # "2.10" would silently become "2.1"
      raise ConfigError(f"Configuration key {key!r} must be quoted to be read as a string: {value!r}")
    if not isinstance(value, expected_type):
      raise ConfigError(
          f"Configuration key {key!r} must be of type {expected_type.__name__}, "
          f"not {type(value).__name__}"
        )
    setattr(self, key, value)

  def _validate(self) -> None:
    if not self.docker_install_method in DOCKER_INSTALL_METHODS:
      raise ConfigError(
          f"docker_install_method must be one of {', '.join(DOCKER_INSTALL_METHODS)}, "
          f"not {self.docker_install_method!r}"
        )
    if LogLevel.from_name(self.log_level) is None:
      raise ConfigError(f"Unknown log_level: {self.log_level!r}")
    if self.compose_version != 'latest':
      try:
        self.compose_version = normalize_version(self.compose_version)
      except InvalidVersion as e:
        raise ConfigError(f"Invalid compose_version: {self.compose_version!r}") from e
    if not os.path.isabs(self.compose_path):
      raise ConfigError(f"compose_path must be an absolute path: {self.compose_path!r}")

_config_keys = frozenset(
    k for k, v in vars(ProvisionConfig).items()
      if not k.startswith('_') and isinstance(v, (str, bool)) and k != 'config_file'
  )

def read_config_file(config_file: str) -> Dict[str, Any]:
  try:
    data = load_yaml_file(config_file)
  except OSError as e:
    raise ConfigError(f"Unable to read configuration file {config_file}: {e}") from e
  except yaml.YAMLError as e:
    raise ConfigError(f"Malformed configuration file {config_file}: {e}") from e
  if data is None:
    data = {}
  if not isinstance(data, dict):
    raise ConfigError(f"Configuration file {config_file} must contain a mapping")
  return data
