#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Installer for the Docker engine"""

from typing import List

from ...config import ProvisionConfig
from ...context import ExecutionContext
from ...log import Logger
from ...os_packages import (
    enable_service,
    install_extras_packages,
    install_os_packages,
    os_group_add_user,
    start_service,
  )
from ...probes import executable_exists, service_is_active, user_in_group
from ...results import StepResult, StepOutcome

def docker_is_installed(ctx: ExecutionContext) -> bool:
  return executable_exists(ctx, 'docker')

def install_docker_package(ctx: ExecutionContext, log: Logger, config: ProvisionConfig) -> StepResult:
  log.info("Installing docker")
  if config.docker_install_method == 'yum':
    install_os_packages(ctx, config.docker_package)
  else:
    install_extras_packages(ctx, config.docker_package, extras_helper=config.extras_helper)
  return StepResult('docker-package', StepOutcome.CHANGED, f"installed {config.docker_package}")

def ensure_docker_service(ctx: ExecutionContext, log: Logger, config: ProvisionConfig) -> StepResult:
  service = config.docker_service
  if service_is_active(ctx, service):
    log.info(f"Service {service} is already active")
    return StepResult('docker-service', StepOutcome.UNCHANGED, f"{service} already active")
  log.info("Enabling docker service")
  enable_service(ctx, service)
  start_service(ctx, service)
  return StepResult('docker-service', StepOutcome.CHANGED, f"{service} enabled and started")

def ensure_docker_group_membership(ctx: ExecutionContext, log: Logger, config: ProvisionConfig) -> StepResult:
  group = config.docker_group
  if user_in_group(ctx, group):
    log.trace(f"User {ctx.user} is already in the '{group}' OS group")
    return StepResult('docker-group', StepOutcome.UNCHANGED, f"{ctx.user} already in {group}")
  log.info(f"Adding user {ctx.user} to the '{group}' OS group")
  os_group_add_user(ctx, group)
  log.warn(
      f"Membership of user {ctx.user} in the '{group}' OS group takes effect at the next login; "
      f"until then, run docker with sudo"
    )
  return StepResult('docker-group', StepOutcome.CHANGED, f"{ctx.user} added to {group}")

def install_docker(ctx: ExecutionContext, log: Logger, config: ProvisionConfig) -> List[StepResult]:
  """Installs the docker package, starts its service, and grants the invoking user access.

  There is no rollback: if a later step fails, earlier steps stay applied.

  Raises:
      subprocess.CalledProcessError: An underlying command exited non-zero.

  Returns:
      List[StepResult]: One result each for the package, the service and the group membership.
  """
  return [
      install_docker_package(ctx, log, config),
      ensure_docker_service(ctx, log, config),
      ensure_docker_group_membership(ctx, log, config),
    ]
