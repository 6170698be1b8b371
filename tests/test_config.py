"""
Configuration loading tests
"""

import pytest
from utils.config import DEFAULT_CONFIG, get_data_path, get_output_dir, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("INVOICE_API_BASE_URL", "INVOICE_API_TIMEOUT", "INVOICE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_file_values_merge_with_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api:\n  timeout: 5\n")

        config = load_config(str(path))

        assert config['api']['timeout'] == 5
        assert config['api']['base_url'] == "https://thepartykart.com"
        assert config['logging']['level'] == "INFO"

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INVOICE_API_BASE_URL", "http://localhost:8000")
        monkeypatch.setenv("INVOICE_API_TIMEOUT", "2.5")
        monkeypatch.setenv("INVOICE_LOG_LEVEL", "DEBUG")

        config = load_config(str(tmp_path / "missing.yaml"))

        assert config['api']['base_url'] == "http://localhost:8000"
        assert config['api']['timeout'] == 2.5
        assert config['logging']['level'] == "DEBUG"

    def test_defaults_not_mutated(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INVOICE_API_BASE_URL", "http://localhost:8000")

        load_config(str(tmp_path / "missing.yaml"))

        assert DEFAULT_CONFIG['api']['base_url'] == "https://thepartykart.com"


def test_paths(tmp_path):
    config = {'data': {'dir': str(tmp_path)}, 'output': {'dir': str(tmp_path / "out")}}

    assert get_data_path("companies.yaml", config) == tmp_path / "companies.yaml"
    assert get_output_dir(config).is_dir()
