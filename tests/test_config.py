"""Tests for YAML configuration loading."""

import pytest
import yaml

from tutoring_platform.config import PlatformConfig, load_config, save_config
from tutoring_platform.errors import ValidationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TUTORING_CONFIG", raising=False)
    monkeypatch.delenv("TUTORING_DATA_DIR", raising=False)


class TestPlatformConfig:
    def test_defaults(self, tmp_path):
        config = PlatformConfig(data_dir=tmp_path)
        assert config.platform_fee_percent == 10.0
        assert config.recent_payments_limit == 20
        assert config.strict_bid_acceptance is False
        assert config.storage == "json"
        assert config.session_file == tmp_path / "session.json"

    @pytest.mark.parametrize("overrides", [
        {"platform_fee_percent": -1},
        {"platform_fee_percent": 101},
        {"storage": "postgres"},
        {"recent_payments_limit": 0},
    ])
    def test_invalid(self, tmp_path, overrides):
        with pytest.raises(ValidationError):
            PlatformConfig(data_dir=tmp_path, **overrides)

    def test_unknown_keys(self):
        with pytest.raises(ValidationError, match="fee_pct"):
            PlatformConfig.from_dict({"fee_pct": 5})


class TestLoadConfig:
    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.safe_dump({
            "data_dir": str(tmp_path / "d"),
            "platform_fee_percent": 12.5,
            "strict_bid_acceptance": True,
        }))

        config = load_config(path)

        assert config.platform_fee_percent == 12.5
        assert config.strict_bid_acceptance is True
        assert config.data_dir == tmp_path / "d"

    def test_env_config_path(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text(yaml.safe_dump({"recent_payments_limit": 5}))
        monkeypatch.setenv("TUTORING_CONFIG", str(path))

        assert load_config().recent_payments_limit == 5

    def test_data_dir_config_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TUTORING_DATA_DIR", str(tmp_path))
        (tmp_path / "config.yaml").write_text(yaml.safe_dump({"storage": "memory"}))

        config = load_config()

        assert config.storage == "memory"
        assert config.data_dir == tmp_path

    def test_env_data_dir_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "c.yaml"
        path.write_text(yaml.safe_dump({"data_dir": "/somewhere/else"}))
        monkeypatch.setenv("TUTORING_DATA_DIR", str(tmp_path / "env"))

        assert load_config(path).data_dir == tmp_path / "env"

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TUTORING_DATA_DIR", str(tmp_path))
        assert load_config().platform_fee_percent == 10.0

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_save_roundtrip(self, tmp_path):
        config = PlatformConfig(data_dir=tmp_path, platform_fee_percent=7.5)
        path = save_config(config)

        assert path == tmp_path / "config.yaml"
        assert load_config(path).platform_fee_percent == 7.5
