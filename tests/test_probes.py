import os

from docker_provision.probes import executable_exists, service_is_active, user_in_group

from conftest import make_executable


def test_executable_exists_on_search_path(host, bin_dir):
    ctx = host.context()
    assert not executable_exists(ctx, "docker")

    make_executable(bin_dir, "docker")

    assert executable_exists(ctx, "docker")


def test_non_executable_file_does_not_count(host, bin_dir):
    path = os.path.join(bin_dir, "docker")
    with open(path, "w", encoding="utf-8") as f:
        f.write("not executable")
    os.chmod(path, 0o644)

    assert not executable_exists(host.context(), "docker")


def test_directory_does_not_count(host, bin_dir):
    os.mkdir(os.path.join(bin_dir, "docker"))

    assert not executable_exists(host.context(), "docker")


def test_service_is_active_queries_systemctl(host):
    ctx = host.context()
    assert not service_is_active(ctx, "docker")

    host.active_services.add("docker")

    assert service_is_active(ctx, "docker")
    assert host.commands == [["systemctl", "is-active", "--quiet", "docker"]] * 2


def test_probes_do_not_mutate_host(host):
    ctx = host.context()
    executable_exists(ctx, "docker")
    service_is_active(ctx, "docker")
    user_in_group(ctx, "docker")

    assert host.active_services == set()
    assert "docker" not in host.groups
    assert not os.listdir(host.bin_dir)


def test_user_in_group(host):
    ctx = host.context()
    assert user_in_group(ctx, "wheel")
    assert not user_in_group(ctx, "docker")
