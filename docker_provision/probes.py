#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Read-only queries used to keep provisioning steps idempotent"""

from typing import Optional

from .context import ExecutionContext
from .util import find_command_in_path

def find_executable(ctx: ExecutionContext, name: str) -> Optional[str]:
  return find_command_in_path(name, searchpath=ctx.search_path)

def executable_exists(ctx: ExecutionContext, name: str) -> bool:
  return not find_executable(ctx, name) is None

def service_is_active(ctx: ExecutionContext, name: str) -> bool:
  return ctx.runner.call(['systemctl', 'is-active', '--quiet', name], quiet=True) == 0

def user_in_group(ctx: ExecutionContext, group_name: str) -> bool:
  return group_name in ctx.groups_of_user()
