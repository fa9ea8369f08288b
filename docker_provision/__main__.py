#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""docker-provision CLI"""

from typing import Optional, Sequence, List

import sys

# This module runs as -m -- do NOT use relative imports
from docker_provision.cli import CommandHandler
from docker_provision.options import COMPOSE_FLAG, parse_install_option

class ProvisionCommand(CommandHandler):
  description = 'Install Docker on Amazon Linux 2, and optionally docker-compose. Must be run as root.'
  epilog = f'Pass {COMPOSE_FLAG} to also install docker-compose to /usr/local/bin/docker-compose.'

  def execute(self, rest: List[str]) -> int:
    option = parse_install_option(rest, strict=self.config.strict_options, log=self.log)
    self.get_provisioner().provision(option)
    return 0

def run(argv: Optional[Sequence[str]]=None, **kwargs) -> int:
  return ProvisionCommand(argv, **kwargs).run()

def main_script():
  sys.exit(run())

# allow running with "python3 -m", or as a standalone script
if __name__ == "__main__":
  main_script()
