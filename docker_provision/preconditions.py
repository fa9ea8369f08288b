#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Checks that must pass before anything on the host is changed"""

from .config import ProvisionConfig
from .context import ExecutionContext, OsIdentity
from .log import Logger

NOT_ROOT_MESSAGE = "This installer must be run as root"
UNSUPPORTED_DISTRO_MESSAGE = "This installer only supports Amazon Linux 2"

def check_privilege(ctx: ExecutionContext, log: Logger) -> None:
  if not ctx.is_root:
    log.fatal(NOT_ROOT_MESSAGE)

def check_distribution(ctx: ExecutionContext, log: Logger, config: ProvisionConfig) -> None:
  # a missing os-release file and a mismatch are reported identically
  expected = OsIdentity(config.expected_distro_id, config.expected_version_id)
  if ctx.os_identity is None or ctx.os_identity != expected:
    log.fatal(UNSUPPORTED_DISTRO_MESSAGE)
  log.trace(f"Detected supported distribution {expected.distro_id} {expected.version_id}")

def check_preconditions(ctx: ExecutionContext, log: Logger, config: ProvisionConfig) -> None:
  check_privilege(ctx, log)
  check_distribution(ctx, log, config)
