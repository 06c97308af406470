"""
Unit tests for configuration loading.
"""
import pytest
from beefdock.MANAGERS.environment_manager import EnvironmentManager
from beefdock.MODELS.errors import ConfigurationError


def test_defaults(tmp_path):
    config = EnvironmentManager(base_dir=str(tmp_path)).load_config({})
    assert config.repository == "mjwhitta/beef"
    assert config.image_reference == "beef_alpine:latest"
    assert config.workspace_name == ".docker_alpine"
    assert config.base_dir == str(tmp_path)
    assert config.required_tools == ["curl", "docker", "jq"]


def test_env_file_then_environment(tmp_path):
    (tmp_path / ".env").write_text(
        "BEEFDOCK_REPOSITORY=beefproject/beef\n"
        "BEEFDOCK_PASSWORD=fromfile\n"
    )
    manager = EnvironmentManager(base_dir=str(tmp_path))
    config = manager.load_config({"BEEFDOCK_PASSWORD": "fromenv"})
    assert config.repository == "beefproject/beef"
    assert config.password == "fromenv"


def test_invalid_value(tmp_path):
    with pytest.raises(ConfigurationError) as exc:
        EnvironmentManager(base_dir=str(tmp_path)).load_config({"BEEFDOCK_PASSWORD": 'a"b'})
    assert exc.value.exit_code == 6
    assert "password" in exc.value.message


def test_proxy(tmp_path):
    proxy = EnvironmentManager(base_dir=str(tmp_path)).load_proxy(
        {"http_proxy": "http://proxy:3128", "https_proxy": ""}
    )
    assert proxy.build_args() == {"http_proxy": "http://proxy:3128"}


@pytest.mark.parametrize("base_image,repository,tag", [
    ("alpine:latest", "alpine", "latest"),
    ("alpine", "alpine", "latest"),
    ("registry:5000/alpine:3", "registry:5000/alpine", "3"),
    ("registry:5000/alpine", "registry:5000/alpine", "latest"),
])
def test_base_image_reference(tmp_path, base_image, repository, tag):
    config = EnvironmentManager(base_dir=str(tmp_path)).load_config({"BEEFDOCK_BASE_IMAGE": base_image})
    assert config.base_repository == repository
    assert config.base_tag == tag
