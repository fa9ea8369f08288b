#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Utilities to assist with installation of OS packages and services"""

from typing import List, Union

from .context import ExecutionContext

def _as_list(package_names: Union[str, List[str]]) -> List[str]:
  if not isinstance(package_names, list):
    package_names = [ package_names ]
  return package_names

def update_and_upgrade_os_packages(ctx: ExecutionContext) -> None:
  ctx.runner.check_call(['yum', 'update', '-y'], reason="Refreshing package metadata and upgrading packages")

def install_os_packages(ctx: ExecutionContext, package_names: Union[str, List[str]]) -> None:
  package_names = _as_list(package_names)
  if len(package_names) > 0:
    ctx.runner.check_call(['yum', 'install', '-y'] + package_names, reason=f"Installing packages {package_names}")

def install_extras_packages(
      ctx: ExecutionContext,
      package_names: Union[str, List[str]],
      extras_helper: str='amazon-linux-extras',
    ) -> None:
  package_names = _as_list(package_names)
  if len(package_names) > 0:
    ctx.runner.check_call(
        [extras_helper, 'install', '-y'] + package_names,
        reason=f"Installing extras packages {package_names}"
      )

def enable_service(ctx: ExecutionContext, service_name: str) -> None:
  ctx.runner.check_call(['systemctl', 'enable', service_name], reason=f"Enabling service {service_name}")

def start_service(ctx: ExecutionContext, service_name: str) -> None:
  ctx.runner.check_call(['systemctl', 'start', service_name], reason=f"Starting service {service_name}")

def os_group_add_user(ctx: ExecutionContext, group_name: str) -> None:
  ctx.runner.check_call(
      ['usermod', '-a', '-G', group_name, ctx.user],
      reason=f"Adding user {ctx.user} to OS group {group_name}"
    )
