#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Standard docker-compose CLI installer"""

from .installer import (
    install_docker_compose,
    docker_compose_is_installed,
    download_docker_compose,
    get_docker_compose_url,
    get_docker_compose_version,
    new_pool_manager,
  )
