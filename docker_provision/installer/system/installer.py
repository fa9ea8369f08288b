#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Refreshes OS packages and ensures the amazon-linux-extras helper is present"""

from ...config import ProvisionConfig
from ...context import ExecutionContext
from ...log import Logger
from ...os_packages import update_and_upgrade_os_packages, install_os_packages
from ...probes import executable_exists
from ...results import StepResult, StepOutcome

STEP_NAME = 'system-update'

def extras_helper_is_installed(ctx: ExecutionContext, config: ProvisionConfig) -> bool:
  return executable_exists(ctx, config.extras_helper)

def update_system(ctx: ExecutionContext, log: Logger, config: ProvisionConfig) -> StepResult:
  """Upgrades all OS packages, then installs the extras helper if it is missing.

  Either command exiting non-zero raises subprocess.CalledProcessError.
  """
  log.info("Updating system packages")
  update_and_upgrade_os_packages(ctx)
  if extras_helper_is_installed(ctx, config):
    log.trace(f"{config.extras_helper} is already installed")
    detail = "packages upgraded"
  else:
    log.info(f"Installing {config.extras_helper_package}")
    install_os_packages(ctx, config.extras_helper_package)
    detail = f"packages upgraded; {config.extras_helper_package} installed"
  return StepResult(STEP_NAME, StepOutcome.CHANGED, detail)
