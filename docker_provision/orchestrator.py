#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Sequences the provisioning steps"""

from typing import Optional, Callable, List, Union

import subprocess

import urllib3

from .config import ProvisionConfig
from .context import ExecutionContext
from .exceptions import ProvisionError, StepFailedError
from .installer.docker import (
    docker_is_installed,
    ensure_docker_group_membership,
    ensure_docker_service,
    install_docker_package,
  )
from .installer.docker_compose import install_docker_compose
from .installer.system import update_system
from .log import Logger
from .options import InstallOption
from .preconditions import check_preconditions
from .results import ProvisionReport, StepResult, StepOutcome

SUCCESS_MESSAGE = "Docker provisioning completed successfully"

StepFunc = Callable[[], Union[StepResult, List[StepResult]]]

class Provisioner:
  """Runs provisioning steps in order, recording a StepResult for each.

  A step that fails is logged at error level and re-raised as
  StepFailedError, which carries the failed command's exit status. No step
  is retried and nothing is rolled back.
  """
  ctx: ExecutionContext
  log: Logger
  config: ProvisionConfig
  report: ProvisionReport
  pool_manager: Optional[urllib3.PoolManager]

  def __init__(
        self,
        ctx: ExecutionContext,
        log: Logger,
        config: Optional[ProvisionConfig]=None,
        pool_manager: Optional[urllib3.PoolManager]=None,
      ):
    self.ctx = ctx
    self.log = log
    self.config = ProvisionConfig() if config is None else config
    self.report = ProvisionReport()
    self.pool_manager = pool_manager

  def run_step(self, name: str, func: StepFunc) -> List[StepResult]:
    try:
      result = func()
    except subprocess.CalledProcessError as e:
      # a negative return code means the command was killed by a signal
      exit_code = e.returncode if e.returncode > 0 else 1
      self.log.error(f"Step '{name}' failed: {e}")
      raise StepFailedError(name, exit_code) from e
    except (ProvisionError, OSError) as e:
      self.log.error(f"Step '{name}' failed: {e}")
      raise StepFailedError(name, 1, str(e)) from e
    results = result if isinstance(result, list) else [ result ]
    for r in results:
      self.report.add(r)
    return results

  def check_preconditions(self) -> None:
    # failures here are fatal log calls, which exit before anything is changed
    check_preconditions(self.ctx, self.log, self.config)
    self.report.add(StepResult('preconditions', StepOutcome.UNCHANGED, "running as root on a supported distribution"))

  def update_system(self) -> None:
    self.run_step('system-update', lambda: update_system(self.ctx, self.log, self.config))

  def install_docker_compose(self) -> None:
    self.run_step(
        'docker-compose',
        lambda: install_docker_compose(self.ctx, self.log, self.config, pool_manager=self.pool_manager)
      )

  def install_docker(self) -> None:
    if docker_is_installed(self.ctx):
      self.log.info("Docker is already installed")
      self.report.add(StepResult('docker', StepOutcome.SKIPPED, "docker already in PATH"))
      return
    self.run_step('docker-package', lambda: install_docker_package(self.ctx, self.log, self.config))
    self.run_step('docker-service', lambda: ensure_docker_service(self.ctx, self.log, self.config))
    self.run_step('docker-group', lambda: ensure_docker_group_membership(self.ctx, self.log, self.config))

  def provision(self, option: InstallOption=InstallOption.DOCKER) -> ProvisionReport:
    self.check_preconditions()
    self.update_system()
    if option.with_compose:
      self.install_docker_compose()
    self.install_docker()
    self.log.debug(f"Step summary: {self.report.summary()}")
    self.log.success(SUCCESS_MESSAGE)
    return self.report

def provision(
      ctx: ExecutionContext,
      option: InstallOption,
      log: Logger,
      config: Optional[ProvisionConfig]=None,
      pool_manager: Optional[urllib3.PoolManager]=None,
    ) -> ProvisionReport:
  """Provisions Docker, and docker-compose if requested, on the host described by ctx.

  Runs the precondition checks, the system update, the docker-compose
  installer (only for InstallOption.DOCKER_AND_COMPOSE) and, if docker is not
  already in PATH, the Docker installer.

  Raises:
      FatalError: A precondition failed.
      StepFailedError: A step failed; exit_code is the failed command's exit status.

  Returns:
      ProvisionReport: The result of every step that ran.
  """
  return Provisioner(ctx, log, config=config, pool_manager=pool_manager).provision(option)
