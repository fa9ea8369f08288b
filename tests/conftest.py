import datetime
import io
import os
import subprocess
from typing import Dict, List, Optional, Set, Tuple

import pytest
import urllib3

from docker_provision.config import ProvisionConfig
from docker_provision.context import ExecutionContext, OsIdentity
from docker_provision.exceptions import CalledProcessErrorWithStderrMessage
from docker_provision.log import Logger
from docker_provision.runner import CommandRunner

AMAZON_LINUX_2 = OsIdentity("amzn", "2")
FIXED_TIME = datetime.datetime(2024, 1, 2, 3, 4, 5)


def make_executable(dirname: str, name: str) -> str:
    path = os.path.join(dirname, name)
    with open(path, "w", encoding="utf-8") as f:
        f.write("#!/bin/sh\n")
    os.chmod(path, 0o755)
    return path


class FakeHost(CommandRunner):
    """A command runner that simulates the effect of each command on an in-memory host."""

    def __init__(self, bin_dir: str):
        super().__init__()
        self.bin_dir = bin_dir
        self.commands: List[List[str]] = []
        self.active_services: Set[str] = set()
        self.groups: List[str] = ["ec2-user", "wheel"]
        self.failures: Dict[Tuple[str, ...], int] = {}
        self.compose_version_output = "v2.20.3\n"
        self.missing: Set[str] = set()

    def _record(self, args) -> Tuple[str, ...]:
        self.commands.append(list(args))
        return tuple(args)

    def call(self, args, quiet=False):
        key = self._record(args)
        if key in self.failures:
            return self.failures[key]
        if list(args[:3]) == ["systemctl", "is-active", "--quiet"]:
            return 0 if args[3] in self.active_services else 3
        return 0

    def check_call(self, args, reason=None):
        key = self._record(args)
        if args[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", args[0])
        if key in self.failures:
            raise subprocess.CalledProcessError(self.failures[key], list(args))
        if key in (("amazon-linux-extras", "install", "-y", "docker"), ("yum", "install", "-y", "docker")):
            make_executable(self.bin_dir, "docker")
        elif key == ("yum", "install", "-y", "amazon-linux-extras"):
            make_executable(self.bin_dir, "amazon-linux-extras")
        elif key[:2] == ("systemctl", "start"):
            self.active_services.add(key[2])
        elif key[:3] == ("usermod", "-a", "-G"):
            self.groups.append(key[3])
        return 0

    def check_output(self, args):
        key = self._record(args)
        if key in self.failures:
            raise CalledProcessErrorWithStderrMessage(self.failures[key], list(args), stderr="failed")
        if list(args[1:]) == ["version", "--short"]:
            return self.compose_version_output
        return ""

    def group_lookup(self, user: str) -> List[str]:
        return list(self.groups)

    def ran(self, *args: str) -> bool:
        return list(args) in self.commands

    def count(self, *args: str) -> int:
        return self.commands.count(list(args))

    def context(
        self,
        euid: int = 0,
        os_identity: Optional[OsIdentity] = AMAZON_LINUX_2,
        user: str = "ec2-user",
    ) -> ExecutionContext:
        return ExecutionContext(
            euid=euid,
            os_identity=os_identity,
            user=user,
            system="Linux",
            machine="x86_64",
            search_path=self.bin_dir,
            runner=self,
            group_lookup=self.group_lookup,
        )


class FakeResponse(io.BytesIO):
    def __init__(self, body: bytes, status: int = 200):
        super().__init__(body)
        self.status = status
        self.released = False

    def release_conn(self):
        self.released = True


class FakePoolManager:
    def __init__(self, body: bytes = b"\x7fELF-compose", status: int = 200, error: Optional[Exception] = None):
        self.body = body
        self.status = status
        self.error = error
        self.urls: List[str] = []
        self.responses: List[FakeResponse] = []

    def request(self, method, url, preload_content=True):
        assert method == "GET"
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        resp = FakeResponse(self.body, self.status)
        self.responses.append(resp)
        return resp


@pytest.fixture
def bin_dir(tmp_path):
    path = tmp_path / "bin"
    path.mkdir()
    return str(path)


@pytest.fixture
def host(bin_dir):
    return FakeHost(bin_dir)


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def log(log_stream):
    return Logger(stream=log_stream, colorize=False, clock=lambda: FIXED_TIME)


@pytest.fixture
def config(bin_dir):
    return ProvisionConfig(compose_path=os.path.join(bin_dir, "docker-compose"))


@pytest.fixture
def pool_manager():
    return FakePoolManager()


@pytest.fixture
def unreachable_pool_manager():
    return FakePoolManager(error=urllib3.exceptions.HTTPError("connection refused"))


def log_messages(stream: io.StringIO) -> List[str]:
    return [line.split("]: ", 1)[1] for line in stream.getvalue().splitlines()]
