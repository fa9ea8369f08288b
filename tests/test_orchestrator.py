import pytest

from docker_provision.exceptions import FatalError, StepFailedError
from docker_provision.options import InstallOption
from docker_provision.orchestrator import SUCCESS_MESSAGE, provision
from docker_provision.results import StepOutcome

from conftest import log_messages, make_executable


def test_scenario_a_fresh_host_without_compose(host, log, log_stream, config, pool_manager):
    report = provision(host.context(), InstallOption.DOCKER, log, config, pool_manager=pool_manager)

    assert host.commands == [
        ["yum", "update", "-y"],
        ["yum", "install", "-y", "amazon-linux-extras"],
        ["amazon-linux-extras", "install", "-y", "docker"],
        ["systemctl", "is-active", "--quiet", "docker"],
        ["systemctl", "enable", "docker"],
        ["systemctl", "start", "docker"],
        ["usermod", "-a", "-G", "docker", "ec2-user"],
    ]
    assert report.step_names == [
        "preconditions",
        "system-update",
        "docker-package",
        "docker-service",
        "docker-group",
    ]
    assert pool_manager.urls == []
    assert log_messages(log_stream)[-1] == SUCCESS_MESSAGE
    assert "[SUCCESS]" in log_stream.getvalue().splitlines()[-1]


def test_scenario_b_docker_present_with_compose(host, log, log_stream, config, pool_manager, bin_dir):
    make_executable(bin_dir, "docker")
    make_executable(bin_dir, "amazon-linux-extras")
    host.active_services.add("docker")

    report = provision(host.context(), InstallOption.DOCKER_AND_COMPOSE, log, config, pool_manager=pool_manager)

    assert len(pool_manager.urls) == 1
    assert report.get("docker-compose").outcome == StepOutcome.CHANGED
    assert report.get("docker").outcome == StepOutcome.SKIPPED
    assert not host.ran("amazon-linux-extras", "install", "-y", "docker")
    assert host.ran("yum", "update", "-y")
    assert log_messages(log_stream)[-1] == SUCCESS_MESSAGE


def test_scenario_c_non_root_exits_before_any_change(host, log, log_stream, config, pool_manager):
    with pytest.raises(FatalError) as exc_info:
        provision(host.context(euid=1000), InstallOption.DOCKER_AND_COMPOSE, log, config, pool_manager=pool_manager)

    assert exc_info.value.exit_code == 1
    assert host.commands == []
    assert pool_manager.urls == []
    assert log_messages(log_stream) == ["This installer must be run as root"]


def test_wrong_distribution_never_reaches_update(host, log, config):
    from docker_provision.context import OsIdentity

    with pytest.raises(FatalError):
        provision(host.context(os_identity=OsIdentity("ubuntu", "22.04")), InstallOption.DOCKER, log, config)

    assert not host.ran("yum", "update", "-y")


def test_second_run_does_not_reinstall(host, log, log_stream, config, pool_manager):
    ctx = host.context()
    provision(ctx, InstallOption.DOCKER_AND_COMPOSE, log, config, pool_manager=pool_manager)
    report = provision(ctx, InstallOption.DOCKER_AND_COMPOSE, log, config, pool_manager=pool_manager)

    messages = log_messages(log_stream)
    assert messages.count("Installing docker") == 1
    assert messages.count("Enabling docker service") == 1
    assert messages.count(SUCCESS_MESSAGE) == 2
    assert host.count("systemctl", "enable", "docker") == 1
    assert host.count("yum", "update", "-y") == 2
    assert len(pool_manager.urls) == 1
    assert report.get("docker").outcome == StepOutcome.SKIPPED
    assert report.get("docker-compose").outcome == StepOutcome.UNCHANGED


def test_compose_is_skipped_without_flag(host, log, config, pool_manager):
    report = provision(host.context(), InstallOption.DOCKER, log, config, pool_manager=pool_manager)

    assert report.get("docker-compose") is None
    assert pool_manager.urls == []


def test_command_failure_carries_exit_status(host, log, log_stream, config):
    host.failures[("amazon-linux-extras", "install", "-y", "docker")] = 7

    with pytest.raises(StepFailedError) as exc_info:
        provision(host.context(), InstallOption.DOCKER, log, config)

    assert exc_info.value.exit_code == 7
    assert exc_info.value.step_name == "docker-package"
    assert "[ERROR]: Step 'docker-package' failed" in log_stream.getvalue()
    assert SUCCESS_MESSAGE not in log_messages(log_stream)
    assert not host.ran("systemctl", "enable", "docker")



def test_missing_command_fails_step(host, log, log_stream, config):
    host.missing.add("yum")

    with pytest.raises(StepFailedError) as exc_info:
        provision(host.context(), InstallOption.DOCKER, log, config)

    assert exc_info.value.exit_code == 1
    assert exc_info.value.step_name == "system-update"
    assert "[ERROR]: Step 'system-update' failed" in log_stream.getvalue()
    assert SUCCESS_MESSAGE not in log_messages(log_stream)
    assert not host.ran("amazon-linux-extras", "install", "-y", "docker")

def test_download_failure_is_fatal(host, log, log_stream, config, unreachable_pool_manager):
    with pytest.raises(StepFailedError) as exc_info:
        provision(host.context(), InstallOption.DOCKER_AND_COMPOSE, log, config, pool_manager=unreachable_pool_manager)

    assert exc_info.value.exit_code == 1
    assert exc_info.value.step_name == "docker-compose"
    assert not host.ran("amazon-linux-extras", "install", "-y", "docker")
