#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Installer for standard docker-compose CLI"""

from typing import Optional

import os
import shutil

import urllib3

from ...config import ProvisionConfig
from ...context import ExecutionContext
from ...exceptions import DownloadError
from ...log import Logger
from ...probes import executable_exists, find_executable
from ...results import StepResult, StepOutcome
from ...util import atomic_mv, run_once

STEP_NAME = 'docker-compose'

DOCKER_COMPOSE_RELEASES_URL = "https://github.com/docker/compose/releases"

def new_pool_manager() -> urllib3.PoolManager:
  """Returns a PoolManager that follows redirects but never retries a failed request."""
  retries = urllib3.Retry(total=None, connect=0, read=0, status=0, other=0, redirect=10, raise_on_redirect=True)
  return urllib3.PoolManager(retries=retries)

@run_once
def get_default_pool_manager() -> urllib3.PoolManager:
  return new_pool_manager()

def get_docker_compose_url(ctx: ExecutionContext, version: str='latest') -> str:
  """Returns the release asset URL for the host's kernel name and machine architecture

  Args:
      ctx (ExecutionContext): Supplies the kernel name (e.g., "Linux") and architecture (e.g., "x86_64").
      version (str, optional): A release version such as "2.20.3", or "latest". Defaults to "latest".
  """
  if version == 'latest':
    release = 'latest/download'
  else:
    version_tag = version if version.startswith('v') else 'v' + version
    release = f"download/{version_tag}"
  return f"{DOCKER_COMPOSE_RELEASES_URL}/{release}/docker-compose-{ctx.system.lower()}-{ctx.machine}"

def docker_compose_is_installed(ctx: ExecutionContext) -> bool:
  return executable_exists(ctx, 'docker-compose')

def download_docker_compose(
      url: str,
      dest_file: str,
      pool_manager: Optional[urllib3.PoolManager]=None,
    ) -> str:
  """Downloads url to dest_file and marks it executable. dest_file is replaced atomically,
  so a failed download never leaves a partial executable behind.

  Raises:
      DownloadError: The transfer failed or the server returned a non-2xx status.
  """
  if pool_manager is None:
    pool_manager = get_default_pool_manager()
  dirname = os.path.dirname(dest_file)
  if not os.path.isdir(dirname):
    os.makedirs(dirname)
  temp_file = dest_file + '.tmp'
  try:
    try:
      resp = pool_manager.request('GET', url, preload_content=False)
    except urllib3.exceptions.HTTPError as e:
      raise DownloadError(f"Unable to download {url}: {e}") from e
    try:
      if resp.status < 200 or resp.status >= 300:
        raise DownloadError(f"Unable to download {url}: HTTP status {resp.status}")
      with open(temp_file, 'wb') as f:
        shutil.copyfileobj(resp, f)
    except urllib3.exceptions.HTTPError as e:
      raise DownloadError(f"Download of {url} was interrupted: {e}") from e
    finally:
      resp.release_conn()
    os.chmod(temp_file, 0o755)
    atomic_mv(temp_file, dest_file)
  finally:
    if os.path.exists(temp_file):
      os.unlink(temp_file)
  return dest_file

def get_docker_compose_version(ctx: ExecutionContext, prog: str) -> str:
  version = ctx.runner.check_output([prog, 'version', '--short']).strip()
  if version.startswith('v'):
    version = version[1:]
  return version

def install_docker_compose(
      ctx: ExecutionContext,
      log: Logger,
      config: ProvisionConfig,
      pool_manager: Optional[urllib3.PoolManager]=None,
    ) -> StepResult:
  """Downloads the docker-compose binary to config.compose_path unless docker-compose is
  already in PATH.

  Raises:
      DownloadError: The release binary could not be fetched.

  Returns:
      StepResult: CHANGED if the binary was downloaded, UNCHANGED if it was already present.
  """
  existing = find_executable(ctx, 'docker-compose')
  if not existing is None:
    log.info(f"docker-compose is already installed at {existing}")
    return StepResult(STEP_NAME, StepOutcome.UNCHANGED, f"already present at {existing}")

  url = get_docker_compose_url(ctx, config.compose_version)
  log.info(f"Installing docker-compose to {config.compose_path}")
  log.debug(f"Downloading {url}")
  download_docker_compose(url, config.compose_path, pool_manager=pool_manager)
  version = get_docker_compose_version(ctx, config.compose_path)
  log.info(f"docker-compose version {version} installed at {config.compose_path}")
  return StepResult(STEP_NAME, StepOutcome.CHANGED, f"version {version} installed at {config.compose_path}")
