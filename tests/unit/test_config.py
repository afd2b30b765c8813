"""Unit tests for the config module."""

import pytest

from ubuntu_diag.utils.config import (
    DEFAULT_SERVICES,
    OutputConfig,
    CommandConfig,
    ServicesConfig,
    UbuntuDiagConfig,
    get_config_paths,
    get_default_config,
    load_config,
    save_config,
)
from ubuntu_diag.utils.errors import ConfigurationError


class TestCommandConfig:
    """Tests for CommandConfig model."""

    def test_default_values(self):
        """Test default values."""
        config = CommandConfig()
        assert config.timeout == 5.0
        assert config.locale == "C"
        assert config.parallel is True

    def test_timeout_must_be_positive(self):
        """Test non-positive timeouts are rejected."""
        with pytest.raises(ValueError):
            CommandConfig(timeout=0)


class TestServicesConfig:
    """Tests for ServicesConfig model."""

    def test_default_values(self):
        """Test the default PipeWire units."""
        config = ServicesConfig()
        assert config.units == DEFAULT_SERVICES
        assert config.user is False

    def test_defaults_not_shared(self):
        """Test each instance gets its own list."""
        config = ServicesConfig()
        config.units.append("cups")
        assert ServicesConfig().units == DEFAULT_SERVICES

    @pytest.mark.parametrize("unit", ["", "pipe wire", "-pipewire", "pipewire;reboot"])
    def test_invalid_units(self, unit):
        """Test unit names are validated."""
        with pytest.raises(ValueError):
            ServicesConfig(units=[unit])


class TestUbuntuDiagConfig:
    """Tests for the top-level config."""

    def test_default_config(self):
        """Test get_default_config."""
        config = get_default_config()
        assert isinstance(config, UbuntuDiagConfig)
        assert config.output == OutputConfig()
        assert config.services.units == DEFAULT_SERVICES


class TestConfigPaths:
    """Tests for config file discovery."""

    def test_search_order(self, isolated_config):
        """Test project files come before user files."""
        paths = get_config_paths()
        assert paths[0] == isolated_config / ".ubuntu-diag.yaml"
        assert paths[1] == isolated_config / ".ubuntu-diag.yml"
        assert paths[2] == isolated_config / "home" / ".ubuntu-diag.yaml"
        assert paths[3] == isolated_config / "home" / ".config" / "ubuntu-diag" / "config.yaml"
        assert len(paths) == 4

    def test_xdg_config_home(self, isolated_config, monkeypatch):
        """Test XDG_CONFIG_HOME adds a search path."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(isolated_config / "xdg"))
        paths = get_config_paths()
        assert paths[-1] == isolated_config / "xdg" / "ubuntu-diag" / "config.yaml"


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_file_gives_defaults(self, isolated_config):
        """Test defaults when nothing is found."""
        assert load_config() == UbuntuDiagConfig()

    def test_project_file(self, isolated_config):
        """Test a file in the working directory is picked up."""
        (isolated_config / ".ubuntu-diag.yaml").write_text(
            "commands:\n  timeout: 2.5\nservices:\n  units: [pipewire, gdm]\n  user: true\n"
        )
        config = load_config()
        assert config.commands.timeout == 2.5
        assert config.services.units == ["pipewire", "gdm"]
        assert config.services.user is True

    def test_explicit_path(self, tmp_path):
        """Test an explicit path."""
        path = tmp_path / "custom.yaml"
        path.write_text("output:\n  default_format: json\n")
        assert load_config(path).output.default_format == "json"

    def test_explicit_path_missing(self, tmp_path):
        """Test a missing explicit path is an error."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        """Test an empty file gives defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == UbuntuDiagConfig()

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML."""
        path = tmp_path / "bad.yaml"
        path.write_text("commands: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        """Test a YAML list at the top level."""
        path = tmp_path / "list.yaml"
        path.write_text("- pipewire\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_invalid_value_names_key(self, tmp_path):
        """Test validation errors carry the offending key."""
        path = tmp_path / "bad_timeout.yaml"
        path.write_text("commands:\n  timeout: -1\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.details["config_key"] == "commands.timeout"
        assert exc_info.value.code == "CONFIG_ERROR"

    def test_invalid_unit_name(self, tmp_path):
        """Test unit names in the file are validated."""
        path = tmp_path / "bad_unit.yaml"
        path.write_text("services:\n  units: ['pipewire; rm -rf /']\n")
        with pytest.raises(ConfigurationError):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path):
        """Test saved settings load back."""
        config = UbuntuDiagConfig(
            commands=CommandConfig(timeout=1.5, parallel=False),
            services=ServicesConfig(units=["pipewire"]),
        )
        path = save_config(config, tmp_path / "nested" / "config.yaml")
        assert path.exists()
        assert load_config(path) == config

    def test_only_non_defaults_written(self, tmp_path):
        """Test default values are omitted from the file."""
        path = save_config(UbuntuDiagConfig(commands=CommandConfig(timeout=9)), tmp_path / "config.yaml")
        content = path.read_text()
        assert "timeout: 9" in content
        assert "services" not in content

    def test_default_location(self, isolated_config):
        """Test the default path under ~/.config."""
        path = save_config(get_default_config())
        assert path == isolated_config / "home" / ".config" / "ubuntu-diag" / "config.yaml"
