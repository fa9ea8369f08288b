#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""OS package metadata refresh and extras helper installer"""

from .installer import (
    update_system,
    extras_helper_is_installed,
  )
