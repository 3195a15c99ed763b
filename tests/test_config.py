"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from hacker_shell.config import Settings, get_settings


class TestSettings:
    """Test Settings defaults and overrides."""

    def test_defaults(self, monkeypatch):
        for name in ('HSH_PROMPT', 'HSH_LINE_BUFFER_SIZE', 'HSH_TOKEN_BUFFER_SIZE',
                     'HSH_UNKNOWN_COMMAND', 'HSH_LOG_LEVEL'):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.prompt == "HS> "
        assert settings.line_buffer_size == 1024
        assert settings.token_buffer_size == 64
        assert settings.unknown_command == "help"
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv('HSH_PROMPT', '>> ')
        monkeypatch.setenv('HSH_LINE_BUFFER_SIZE', '32')
        monkeypatch.setenv('HSH_UNKNOWN_COMMAND', 'launch')

        settings = Settings(_env_file=None)

        assert settings.prompt == '>> '
        assert settings.line_buffer_size == 32
        assert settings.unknown_command == 'launch'

    def test_rejects_bad_policy(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, unknown_command='ignore')

    def test_rejects_non_positive_buffer(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, line_buffer_size=0)

    def test_get_settings_ignores_none_overrides(self, monkeypatch):
        monkeypatch.delenv('HSH_PROMPT', raising=False)

        settings = get_settings(prompt=None, log_level='warning')

        assert settings.prompt == "HS> "
        assert settings.log_level == 'WARNING'

    def test_log_level_is_case_insensitive(self):
        settings = Settings(_env_file=None, log_level='debug')

        assert settings.log_level == 'DEBUG'

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level='foo')
