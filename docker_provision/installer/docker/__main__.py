#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Docker engine installer command-line tool"""

from typing import Optional, Sequence, List

import sys

# do not use relative imports
from docker_provision.cli import CommandHandler
from docker_provision.options import reject_extra_arguments

class DockerInstallCommand(CommandHandler):
  prog = 'docker-provision-docker'
  description = 'Install the Docker engine on Amazon Linux 2 if it is not already installed.'

  def execute(self, rest: List[str]) -> int:
    reject_extra_arguments(rest)
    provisioner = self.get_provisioner()
    provisioner.check_preconditions()
    provisioner.install_docker()
    self.log.success("Docker installation completed successfully")
    return 0

def main(argv: Optional[Sequence[str]]=None, prog: Optional[str]=None) -> int:
  return DockerInstallCommand(argv, prog=prog).run()

if __name__ == "__main__":
  sys.exit(main())
