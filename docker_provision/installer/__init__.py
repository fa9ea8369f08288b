#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Installers for Docker and its prerequisites"""

from .system import update_system
from .docker import install_docker, docker_is_installed
from .docker_compose import install_docker_compose, docker_compose_is_installed, get_docker_compose_url
