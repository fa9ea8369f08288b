#!/usr/bin/env python3
#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Standard docker-compose CLI installer command-line tool"""

from typing import Optional, Sequence, List

import sys

# do not use relative imports
from docker_provision.cli import CommandHandler
from docker_provision.options import reject_extra_arguments

class DockerComposeInstallCommand(CommandHandler):
  prog = 'docker-provision-compose'
  description = 'Download docker-compose to /usr/local/bin/docker-compose if it is not already in PATH.'

  def execute(self, rest: List[str]) -> int:
    reject_extra_arguments(rest)
    provisioner = self.get_provisioner()
    provisioner.check_preconditions()
    provisioner.install_docker_compose()
    self.log.success("docker-compose installation completed successfully")
    return 0

def main(argv: Optional[Sequence[str]]=None, prog: Optional[str]=None) -> int:
  return DockerComposeInstallCommand(argv, prog=prog).run()

if __name__ == "__main__":
  sys.exit(main())
