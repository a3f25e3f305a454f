"""
Tests for configuration loading — hostprep.yml and its defaults.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from hostprep.core.config.loader import ConfigError, find_config_file, load_config
from hostprep.core.models.config import ProvisionConfig
from hostprep.core.use_cases.config_check import check_config


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("HOSTPREP_CONFIG", raising=False)


class TestDefaults:
    def test_stock_toolchain(self):
        config = ProvisionConfig()
        assert config.docker.package == "docker.io"
        assert config.compose.plugin_package == "docker-compose-plugin"
        assert config.python.minimum == "3.9"
        assert config.python.base_packages == ["python3", "python3-venv", "python3-pip"]
        assert config.framework.package == "django"
        assert config.strict is False

    def test_export_line(self):
        assert ProvisionConfig().profile.export_line == 'export PATH="$HOME/.local/bin:$PATH"'

    def test_export_line_absolute(self):
        config = ProvisionConfig.model_validate({"profile": {"user_bin": "/opt/bin"}})
        assert config.profile.export_line == 'export PATH="/opt/bin:$PATH"'

    def test_bad_minimum_rejected(self):
        with pytest.raises(ValidationError):
            ProvisionConfig.model_validate({"python": {"minimum": "latest"}})

    @pytest.mark.parametrize("timeout", [0, -5])
    def test_non_positive_timeout_rejected(self, timeout):
        with pytest.raises(ValidationError):
            ProvisionConfig.model_validate({"command_timeout": timeout})

    def test_timeout_accepted(self):
        assert ProvisionConfig.model_validate({"command_timeout": 30}).command_timeout == 30
        assert ProvisionConfig().command_timeout is None


class TestLoadConfig:
    def test_load_valid(self, tmp_path: Path):
        path = tmp_path / "hostprep.yml"
        path.write_text("strict: true\ndocker:\n  group: containers\n")
        config = load_config(path)
        assert config.strict is True
        assert config.docker.group == "containers"
        assert config.docker.package == "docker.io"

    def test_empty_file_is_defaults(self, tmp_path: Path):
        path = tmp_path / "hostprep.yml"
        path.write_text("")
        assert load_config(path) == ProvisionConfig()

    def test_missing_explicit_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml_raises(self, tmp_path: Path):
        path = tmp_path / "hostprep.yml"
        path.write_text("docker: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "hostprep.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_unknown_key_raises(self, tmp_path: Path):
        path = tmp_path / "hostprep.yml"
        path.write_text("framework:\n  pakage: flask\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_auto_search_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == ProvisionConfig()

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / "custom.yml"
        path.write_text("command_timeout: 600\n")
        monkeypatch.setenv("HOSTPREP_CONFIG", str(path))
        assert load_config().command_timeout == 600

    def test_env_var_missing_file_raises(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HOSTPREP_CONFIG", str(tmp_path / "gone.yml"))
        with pytest.raises(ConfigError):
            load_config()


class TestFindConfigFile:
    def test_find_in_current_dir(self, tmp_path: Path):
        (tmp_path / "hostprep.yml").write_text("")
        assert find_config_file(tmp_path) == (tmp_path / "hostprep.yml").resolve()

    def test_find_in_parent_dir(self, tmp_path: Path):
        (tmp_path / "hostprep.yml").write_text("")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        assert find_config_file(child) == (tmp_path / "hostprep.yml").resolve()


class TestCheckConfig:
    def test_missing_file_warns(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        result = check_config()
        assert result.valid
        assert result.config_path is None
        assert any("defaults apply" in w for w in result.warnings)

    def test_env_path_to_missing_file_is_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        missing = tmp_path / "nope.yml"
        monkeypatch.setenv("HOSTPREP_CONFIG", str(missing))
        result = check_config()
        assert not result.valid
        assert result.config_path == missing
        assert any("Config file not found" in e for e in result.errors)
        assert not any("defaults apply" in w for w in result.warnings)

    def test_explicit_missing_file_is_error(self, tmp_path: Path):
        result = check_config(tmp_path / "nope.yml")
        assert not result.valid
        assert not any("defaults apply" in w for w in result.warnings)

    def test_empty_candidates_warns(self, tmp_path: Path):
        path = tmp_path / "hostprep.yml"
        path.write_text("python:\n  upgrade_candidates: []\n")
        result = check_config(path)
        assert result.valid
        assert any("upgrade_candidates" in w for w in result.warnings)

    def test_same_compose_packages_warns(self, tmp_path: Path):
        path = tmp_path / "hostprep.yml"
        path.write_text("compose:\n  plugin_package: docker-compose\n")
        result = check_config(path)
        assert any("same package" in w for w in result.warnings)

    def test_empty_base_packages_is_error(self, tmp_path: Path):
        path = tmp_path / "hostprep.yml"
        path.write_text("python:\n  base_packages: []\n")
        result = check_config(path)
        assert not result.valid
        assert result.errors
