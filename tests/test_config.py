import pytest

from docker_provision.config import ProvisionConfig
from docker_provision.exceptions import ConfigError


def test_defaults_target_amazon_linux_2():
    config = ProvisionConfig()

    assert config.expected_distro_id == "amzn"
    assert config.expected_version_id == "2"
    assert config.compose_path == "/usr/local/bin/docker-compose"
    assert config.compose_version == "latest"
    assert config.strict_options is False
    assert config.config_file is None


def test_yaml_file_overrides_defaults(tmp_path):
    path = tmp_path / "provision.yaml"
    path.write_text(
        "expected_version_id: 2\n"
        "docker_install_method: yum\n"
        "compose_version: v2.20.3\n"
        "strict_options: true\n"
        "log_level: info\n",
        encoding="utf-8",
    )

    config = ProvisionConfig(config_file=str(path))

    assert config.expected_version_id == "2"
    assert config.docker_install_method == "yum"
    assert config.compose_version == "2.20.3"
    assert config.strict_options is True
    assert config.log_level == "info"
    assert config.config_file == str(path)


def test_empty_yaml_file_uses_defaults(tmp_path):
    path = tmp_path / "provision.yaml"
    path.write_text("", encoding="utf-8")

    assert ProvisionConfig(config_file=str(path)).docker_package == "docker"


@pytest.mark.parametrize(
    "text",
    [
        "no_such_key: 1\n",
        "strict_options: maybe\n",
        "docker_install_method: apt\n",
        "compose_version: not-a-version\n",
        "compose_version: 2.20\n",
        "expected_version_id: 2.10\n",
        "compose_path: relative/docker-compose\n",
        "log_level: chatty\n",
        "- a\n- list\n",
        "key: [unclosed\n",
    ],
)
def test_invalid_config_is_rejected(tmp_path, text):
    path = tmp_path / "provision.yaml"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError):
        ProvisionConfig(config_file=str(path))


def test_missing_config_file_is_rejected(tmp_path):
    with pytest.raises(ConfigError):
        ProvisionConfig(config_file=str(tmp_path / "missing.yaml"))
