"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml

from backup_check.config.config_manager import ConfigManager, parse_directories
from backup_check.config.config_validator import ConfigValidator
from backup_check.core.exceptions import ConfigurationError
from backup_check.core.models import CheckConfig

REQUIRED = {'directories': '/srv/backups', 'max_age_seconds': 86400, 'min_size_bytes': 1048576}


@pytest.fixture
def no_default_config(monkeypatch, tmp_path: Path):
    """Keep the default config search from finding real files."""
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_LOCATIONS", [str(tmp_path / "none.yaml")])


@pytest.fixture
def config_file(tmp_path: Path):
    def _write(data) -> str:
        path = tmp_path / "backup-check.yaml"
        path.write_text(yaml.safe_dump(data) if not isinstance(data, str) else data)
        return str(path)
    return _write


class TestConfigManager:

    def test_defaults_without_file(self, no_default_config) -> None:
        config = ConfigManager().build_check_config(REQUIRED)

        assert config == CheckConfig(
            directories=('/srv/backups',),
            max_age_seconds=86400,
            min_size_bytes=1048576,
            pattern='*',
            sample_size=10,
            warning_disk_percent=80.0,
            critical_disk_percent=90.0,
            disk_probe='auto'
        )

    def test_file_values_are_used(self, config_file) -> None:
        path = config_file({'check': {
            'directories': ['/a', '/b'],
            'pattern': '*.sql.gz',
            'max_age_seconds': 3600,
            'min_size_bytes': 10,
            'sample_size': 5,
            'warning_disk_percent': 70,
            'critical_disk_percent': 85,
        }})

        config = ConfigManager(path).build_check_config()

        assert config.directories == ('/a', '/b')
        assert config.pattern == '*.sql.gz'
        assert config.sample_size == 5
        assert config.warning_disk_percent == 70.0
        assert config.critical_disk_percent == 85.0

    def test_overrides_beat_file_and_none_is_ignored(self, config_file) -> None:
        path = config_file({'check': dict(REQUIRED, pattern='*.tar')})

        config = ConfigManager(path).build_check_config({'max_age_seconds': 60, 'pattern': None})

        assert config.max_age_seconds == 60
        assert config.pattern == '*.tar'

    def test_logging_section_defaults(self, config_file) -> None:
        manager = ConfigManager(config_file({'logging': {'level': 'DEBUG'}}))

        assert manager.get_logging_config() == {'level': 'DEBUG', 'file': None}

    def test_default_location_is_searched(self, monkeypatch, config_file) -> None:
        path = config_file({'check': REQUIRED})
        monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_LOCATIONS", ["/nonexistent.yaml", path])

        manager = ConfigManager()
        manager.load_config()

        assert manager.config_file == path

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigManager(str(tmp_path / "missing.yaml")).load_config()

    def test_invalid_yaml(self, config_file) -> None:
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigManager(config_file("check: [unclosed")).load_config()

    def test_non_mapping_yaml(self, config_file) -> None:
        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigManager(config_file("- just\n- a list\n")).load_config()

    def test_missing_thresholds(self, no_default_config) -> None:
        with pytest.raises(ConfigurationError, match="max_age_seconds"):
            ConfigManager().build_check_config({'directories': '/srv', 'min_size_bytes': 1})


class TestParseDirectories:

    def test_comma_separated(self) -> None:
        assert parse_directories(" /a , ,/b,") == ['/a', '/b']

    def test_list(self) -> None:
        assert parse_directories(['/a', ' /b ']) == ['/a', '/b']

    def test_none(self) -> None:
        assert parse_directories(None) == []

    def test_invalid_type(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_directories(42)


class TestConfigValidator:

    @pytest.fixture
    def valid(self) -> dict:
        return {'directories': ['/srv'], 'max_age_seconds': 60, 'min_size_bytes': 1,
                'pattern': '*', 'sample_size': 10, 'warning_disk_percent': 80.0,
                'critical_disk_percent': 90.0, 'disk_probe': 'auto'}

    def test_valid(self, valid: dict) -> None:
        ConfigValidator().validate(valid)

    @pytest.mark.parametrize("key, value", [
        ('directories', []),
        ('directories', ['']),
        ('max_age_seconds', 0),
        ('max_age_seconds', -5),
        ('max_age_seconds', '60'),
        ('min_size_bytes', 0),
        ('min_size_bytes', True),
        ('sample_size', 0),
        ('warning_disk_percent', 0),
        ('critical_disk_percent', 101),
        ('warning_disk_percent', 95.0),
        ('pattern', ''),
        ('disk_probe', 'magic'),
    ])
    def test_invalid(self, valid: dict, key: str, value) -> None:
        valid[key] = value

        with pytest.raises(ConfigurationError):
            ConfigValidator().validate(valid)

    def test_configuration_error_is_value_error(self) -> None:
        assert issubclass(ConfigurationError, ValueError)


class TestCheckConfig:
    """Test that a config built directly, without the manager, is still checked."""

    @pytest.mark.parametrize("key, value", [
        ('directories', ()),
        ('pattern', ''),
        ('max_age_seconds', 0),
        ('min_size_bytes', -1),
        ('sample_size', 0),
        ('warning_disk_percent', 0.0),
        ('critical_disk_percent', 100.5),
        ('warning_disk_percent', 95.0),
    ])
    def test_invalid_values_raise(self, key: str, value) -> None:
        settings = {'directories': ('/srv',), 'max_age_seconds': 60, 'min_size_bytes': 1}
        settings[key] = value

        with pytest.raises(ConfigurationError):
            CheckConfig(**settings)

    def test_equal_warning_and_critical_are_allowed(self) -> None:
        config = CheckConfig(directories=('/srv',), max_age_seconds=60, min_size_bytes=1,
                             warning_disk_percent=90.0, critical_disk_percent=90.0)

        assert config.warning_disk_percent == config.critical_disk_percent
