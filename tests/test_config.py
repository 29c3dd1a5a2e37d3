"""
Tests for configuration management.

Run with: pytest tests/test_config.py -v
"""

import json

import pytest

from rignorm.core.constants import MIN_BONE_COUNT, REQUIRED_BONES
from rignorm.core.exceptions import ConfigError, RigNormError
from rignorm.utils.config import NormalizerConfig, load_config, save_config


class TestNormalizerConfig:
    """Test config defaults and validation."""

    def test_defaults(self):
        config = NormalizerConfig()
        assert config.min_bone_count == MIN_BONE_COUNT
        assert config.small_height_threshold == 0.1
        assert config.max_listed_missing_bones == 3
        assert config.required_bones == list(REQUIRED_BONES)
        assert config.extra == {}

    def test_defaults_not_shared(self):
        a = NormalizerConfig()
        b = NormalizerConfig()
        a.required_bones.append('Tail')
        assert 'Tail' not in b.required_bones

    @pytest.mark.parametrize("kwargs", [
        {'min_bone_count': -1},
        {'small_height_threshold': -0.5},
        {'max_listed_missing_bones': 0},
        {'required_bones': []},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            NormalizerConfig(**kwargs)

    def test_config_error_is_rignorm_error(self):
        assert issubclass(ConfigError, RigNormError)

    def test_from_dict_keeps_unknown_keys(self):
        config = NormalizerConfig.from_dict({'min_bone_count': 10, 'vendor': 'acme'})
        assert config.min_bone_count == 10
        assert config.extra == {'vendor': 'acme'}

    def test_update_returns_copy(self):
        config = NormalizerConfig()
        updated = config.update(min_bone_count=5)
        assert updated.min_bone_count == 5
        assert config.min_bone_count == MIN_BONE_COUNT


class TestConfigFiles:
    """Test JSON load/save."""

    def test_roundtrip(self, tmp_path):
        path = tmp_path / 'nested' / 'config.json'
        config = NormalizerConfig(min_bone_count=12, required_bones=['Hips', 'Head'])
        save_config(config, str(path))
        loaded = load_config(str(path))

        assert loaded == config

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match='not found'):
            load_config(str(tmp_path / 'absent.json'))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{not json')
        with pytest.raises(ConfigError, match='Invalid JSON'):
            load_config(str(path))

    def test_not_an_object(self, tmp_path):
        path = tmp_path / 'list.json'
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(ConfigError, match='JSON object'):
            load_config(str(path))

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / 'neg.json'
        path.write_text(json.dumps({'min_bone_count': -3}))
        with pytest.raises(ConfigError):
            load_config(str(path))
