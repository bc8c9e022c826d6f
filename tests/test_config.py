import logging

import pytest

from webpcon import config


def test_exclusion_tables_are_immutable():
    with pytest.raises(AttributeError):
        config.SKIP_DIRS.add("src")
    with pytest.raises(TypeError):
        config.DECODER_FORMATS[".webp"] = "WEBP"


def test_backup_and_cache_dirs_are_skipped():
    assert config.BACKUP_DIR_NAME == ".webpcon_backup"
    assert config.CACHE_DIR_NAME == ".webpcon_cache"
    assert {config.BACKUP_DIR_NAME, config.CACHE_DIR_NAME} <= config.SKIP_DIRS


def test_webp_is_not_a_source_format():
    assert ".webp" not in config.IMAGE_EXTENSIONS


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("WEBPCON_LOG_LEVEL", "debug")
    assert config.get_log_level() == logging.DEBUG

    monkeypatch.setenv("WEBPCON_LOG_LEVEL", "chatty")
    assert config.get_log_level() == logging.INFO


def test_log_file_is_optional(monkeypatch):
    monkeypatch.delenv("WEBPCON_LOG_FILE", raising=False)
    assert config.get_log_file() is None

    monkeypatch.setenv("WEBPCON_LOG_FILE", "run.log")
    assert config.get_log_file() == "run.log"
