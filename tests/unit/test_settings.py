"""Tests for settings and logging configuration."""

import sys

import pytest
from loguru import logger
from pydantic import ValidationError

from neo_filesystem import (
    ConfigurationError,
    DefaultFormatter,
    FilesystemSettings,
    FormatterRegistry,
    Visibility,
    load_settings,
    setup_logging,
)
from neo_filesystem.config.logging_config import silence_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "FILESYSTEM_ADAPTER",
        "FILESYSTEM_ADAPTER_ARGUMENTS",
        "FILESYSTEM_FORMATTER",
        "FILESYSTEM_VISIBILITY",
        "FILESYSTEM_ENTITY_HASH_ALGO",
        "FILESYSTEM_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestFilesystemSettings:
    """Test FilesystemSettings."""

    def test_defaults(self):
        settings = FilesystemSettings()

        assert settings.adapter == "Local"
        assert settings.adapter_arguments == {}
        assert settings.formatter == "Default"
        assert settings.visibility is Visibility.PUBLIC
        assert settings.entity_hash_algo == "md5"
        assert settings.entity_class is None
        assert settings.log_level == "INFO"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("FILESYSTEM_ADAPTER", "Memory")
        monkeypatch.setenv("FILESYSTEM_ADAPTER_ARGUMENTS", '{"root": "/srv/files"}')
        monkeypatch.setenv("FILESYSTEM_VISIBILITY", "private")
        monkeypatch.setenv("FILESYSTEM_LOG_LEVEL", "debug")

        settings = FilesystemSettings()

        assert settings.adapter == "Memory"
        assert settings.adapter_arguments == {"root": "/srv/files"}
        assert settings.visibility is Visibility.PRIVATE
        assert settings.log_level == "DEBUG"

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("FILESYSTEM_ADAPTER", "Memory")

        assert FilesystemSettings(adapter="Local").adapter == "Local"

    def test_names_are_stripped(self):
        settings = FilesystemSettings(adapter=" Memory ", formatter="  ")

        assert settings.adapter == "Memory"
        assert settings.formatter == ""

    def test_invalid_mapping_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({"visibility": "hidden"})

        assert exc_info.value.component == "settings"
        assert exc_info.value.details["errors"][0]["field"] == "visibility"
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_invalid_visibility_rejected(self):
        with pytest.raises(ValidationError):
            FilesystemSettings(visibility="hidden")

    def test_adapter_options_include_visibility(self):
        settings = FilesystemSettings(adapter_arguments={"root": "var"}, visibility="private")

        assert settings.adapter_options() == {"visibility": Visibility.PRIVATE, "root": "var"}

    def test_load_settings(self):
        settings = FilesystemSettings(adapter="Memory")

        assert load_settings(settings) is settings
        assert load_settings({"formatter": "Entity"}).formatter == "Entity"
        assert load_settings(None).adapter == "Local"


class TestLogging:
    """Test loguru sink setup."""

    def test_file_sink(self, tmp_path):
        log_file = tmp_path / "filesystem.log"

        setup_logging(FilesystemSettings(log_file=str(log_file), log_level="debug", log_format="{message}"))
        try:
            logger.info("stored avatar.png")
        finally:
            logger.remove()
            logger.add(sys.stderr)

        assert "stored avatar.png" in log_file.read_text()

    def test_silence_logging(self):
        messages = []
        sink_id = logger.add(messages.append, level="WARNING", format="{message}")
        try:
            silence_logging()
            FormatterRegistry().register("Default", DefaultFormatter)
            assert messages == []

            logger.enable("neo_filesystem")
            FormatterRegistry().register("Default", DefaultFormatter)
            assert len(messages) == 1
            assert "already registered" in messages[0]
        finally:
            logger.remove(sink_id)
            logger.enable("neo_filesystem")
