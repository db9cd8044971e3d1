import pytest

from shared.config import AppConfig


def test_defaults():
    config = AppConfig()
    assert config.global_settings.log_level == "INFO"
    assert config.warden.registry_source == ""
    assert config.warden.http_retries == 3
    assert config.warden.strict is False


def test_load_overrides_and_ignores_unknown_keys(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[global]\nlog_level = "DEBUG"\nunknown = 1\n\n'
        '[warden]\nregistry_source = "https://registry.example/list"\n'
        "http_timeout = 5.0\n",
        encoding="utf-8",
    )
    config = AppConfig.load(path)
    assert config.global_settings.log_level == "DEBUG"
    assert config.warden.registry_source == "https://registry.example/list"
    assert config.warden.http_timeout == 5.0
    assert config.warden.scan_encoding == "utf-8"


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(tmp_path / "missing.toml")


def test_to_dict_round_trips_sections():
    data = AppConfig().to_dict()
    assert set(data) == {"global_settings", "warden"}
    assert data["warden"]["http_timeout"] == 30.0
    assert set(data["global_settings"]) == {"log_level", "log_file", "log_json"}
    assert data["warden"]["registry_encoding"] == "utf-8"


def test_get_config_caches_explicit_load(tmp_path):
    from shared.config import get_config

    path = tmp_path / "config.toml"
    path.write_text('[warden]\nscan_file = "scan.txt"\n', encoding="utf-8")
    loaded = get_config(path)
    assert loaded.warden.scan_file == "scan.txt"
    assert get_config() is loaded
