#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Command-line scaffolding shared by the docker-provision tools"""

from typing import Optional, Sequence, List, TextIO, Callable

import sys
import argparse

import argcomplete # type: ignore[import]
import colorama # type: ignore[import]
from colorama import Fore, Style # type: ignore[import]
import urllib3

from .version import __version__ as pkg_version
from .config import ProvisionConfig
from .context import ExecutionContext
from .exceptions import CmdExitError, FatalError, StepFailedError, UnknownOptionError
from .log import Logger, LogLevel, is_colorizable
from .orchestrator import Provisioner
from .runner import CommandRunner

ContextFactory = Callable[[CommandRunner, ProvisionConfig], ExecutionContext]

def host_context(runner: CommandRunner, config: ProvisionConfig) -> ExecutionContext:
  return ExecutionContext.from_host(runner=runner, os_release_file=config.os_release_file)

class ArgparseExitError(CmdExitError):
  pass

class NoExitArgumentParser(argparse.ArgumentParser):
  def exit(self, status=0, message=None):
    if message:
      self._print_message(message, sys.stderr)
    raise ArgparseExitError(status, message)

class CommandHandler:
  """Parses global options, sets up logging and configuration, and maps errors to exit codes.

  Subclasses supply the description and implement execute().
  """
  prog: str = 'docker-provision'
  description: str = ''
  epilog: Optional[str] = None

  _argv: Optional[Sequence[str]]
  _parser: argparse.ArgumentParser
  _args: argparse.Namespace
  _stream: Optional[TextIO]
  _context_factory: ContextFactory
  _pool_manager: Optional[urllib3.PoolManager]

  _colorize_stderr: bool = False

  log: Logger
  config: ProvisionConfig

  def __init__(
        self,
        argv: Optional[Sequence[str]]=None,
        prog: Optional[str]=None,
        stream: Optional[TextIO]=None,
        context_factory: Optional[ContextFactory]=None,
        pool_manager: Optional[urllib3.PoolManager]=None,
      ):
    self._argv = argv
    if not prog is None:
      self.prog = prog
    self._stream = stream
    self._context_factory = host_context if context_factory is None else context_factory
    self._pool_manager = pool_manager

  def ecolor(self, codes: str) -> str:
    return codes if self._colorize_stderr else ""

  def add_arguments(self, parser: argparse.ArgumentParser) -> None:
    pass

  def execute(self, rest: List[str]) -> int:
    raise NotImplementedError()

  def get_context(self) -> ExecutionContext:
    return self._context_factory(CommandRunner(log=self.log), self.config)

  def get_provisioner(self) -> Provisioner:
    return Provisioner(self.get_context(), self.log, config=self.config, pool_manager=self._pool_manager)

  def get_parser(self) -> argparse.ArgumentParser:
    parser = NoExitArgumentParser(prog=self.prog, description=self.description, epilog=self.epilog)
    parser.add_argument('--version', action='version', version=f'%(prog)s {pkg_version}')
    parser.add_argument('--traceback', "--tb", action='store_true', default=False,
                        help='Display detailed exception information')
    parser.add_argument('-M', '--monochrome', action='store_true', default=False,
                        help='Output in monochrome. Default is to colorize if stream is a compatible terminal')
    parser.add_argument('--config', default=None,
                        help="Read settings from the specified YAML file")
    parser.add_argument('--log-level', default=None, choices=[ x.value for x in LogLevel ],
                        help='Suppress messages below this level. Default is "trace" (show everything)')
    self.add_arguments(parser)
    return parser

  def run(self) -> int:
    """Run the command-line tool with the provided arguments

    Returns:
        int: The exit code that would be returned if this were run as a standalone command.
    """
    parser = self.get_parser()
    self._parser = parser
    argcomplete.autocomplete(parser)
    try:
      args, rest = parser.parse_known_args(self._argv)
    except ArgparseExitError as ex:
      return ex.exit_code
    self._args = args
    traceback: bool = args.traceback
    monochrome: bool = args.monochrome
    if not monochrome and self._stream is None:
      colorize_stdout = is_colorizable(sys.stdout)
      self._colorize_stderr = is_colorizable(sys.stderr)
      if colorize_stdout or self._colorize_stderr:
        colorama.init(wrap=False)
        if colorize_stdout:
          sys.stdout = colorama.AnsiToWin32(sys.stdout).stream
        if self._colorize_stderr:
          sys.stderr = colorama.AnsiToWin32(sys.stderr).stream
    self.log = Logger(stream=self._stream, colorize=False if monochrome else None)
    try:
      self.config = ProvisionConfig(config_file=args.config)
      log_level: str = self.config.log_level if args.log_level is None else args.log_level
      self.log.min_level = LogLevel(log_level.lower())
      rc = self.execute(rest)
    except Exception as ex:
      if isinstance(ex, CmdExitError):
        rc = ex.exit_code
      else:
        rc = 1
      if rc != 0:
        if traceback:
          raise
        if isinstance(ex, UnknownOptionError):
          parser.print_usage(sys.stderr)
        if not isinstance(ex, (FatalError, StepFailedError)):
          # fatal and step failures have already been logged
          print(f"{self.ecolor(Fore.RED)}{self.prog}: error: {ex}{self.ecolor(Style.RESET_ALL)}", file=sys.stderr)
    return rc
