"""Configuration tests driven by environment variables."""

from __future__ import annotations

from pathlib import Path

from debtbook.config import BaseConfig, DevConfig


def test_defaults_point_inside_data_dir(isolated_data_dir):
    config = BaseConfig()

    assert config.DATA_DIR == isolated_data_dir.resolve()
    assert config.DATA_DIR.exists()
    assert config.database_path == isolated_data_dir.resolve() / "debtbook.db"
    assert config.export_dir == isolated_data_dir.resolve() / "exports"
    assert config.DEV_MODE is False
    assert config.CURRENCY_SYMBOL == "R$"


def test_database_url_override(monkeypatch, tmp_path):
    target = tmp_path / "elsewhere.db"
    monkeypatch.setenv("DEBTBOOK_DATABASE_URL", f"sqlite:///{target}")

    assert BaseConfig().database_path == target


def test_memory_database_has_no_path(monkeypatch):
    monkeypatch.setenv("DEBTBOOK_DATABASE_URL", "sqlite:///:memory:")

    assert BaseConfig().database_path is None


def test_flags_and_currency_from_env(monkeypatch):
    monkeypatch.setenv("DEBTBOOK_DEV_MODE", "yes")
    monkeypatch.setenv("DEBTBOOK_CURRENCY_SYMBOL", "€")

    config = BaseConfig()

    assert config.DEV_MODE is True
    assert config.CURRENCY_SYMBOL == "€"


def test_engine_options_allow_cross_thread_use():
    options = BaseConfig().sqlalchemy_engine_options()

    assert options["connect_args"]["check_same_thread"] is False
    assert isinstance(BaseConfig().DATA_DIR, Path)


def test_dev_config_flags_debug():
    config = DevConfig()

    assert config.DEBUG is True
    assert config.TESTING is False
    assert config.database_path.name == "debtbook.db"
