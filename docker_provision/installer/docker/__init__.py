#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Docker engine installer for Amazon Linux 2"""

from .installer import (
    install_docker,
    install_docker_package,
    ensure_docker_service,
    ensure_docker_group_membership,
    docker_is_installed,
  )
