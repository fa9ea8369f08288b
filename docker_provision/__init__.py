# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Package docker_provision provisions Docker, and optionally docker-compose,
on Amazon Linux 2 hosts: it checks that it is running as root on a supported
distribution, upgrades OS packages, installs and starts Docker, and grants
the invoking user access to it.
"""

from .version import __version__

from .exceptions import (
    ProvisionError,
    ConfigError,
    DownloadError,
    CalledProcessErrorWithStderrMessage,
    CmdExitError,
    FatalError,
    UnknownOptionError,
    StepFailedError,
  )
from .log import Logger, LogLevel
from .config import ProvisionConfig
from .context import ExecutionContext, OsIdentity, parse_os_release, read_os_identity
from .runner import CommandRunner
from .options import InstallOption, COMPOSE_FLAG, parse_install_option
from .probes import executable_exists, service_is_active, user_in_group
from .preconditions import check_privilege, check_distribution, check_preconditions
from .results import StepOutcome, StepResult, ProvisionReport
from .orchestrator import Provisioner, provision
