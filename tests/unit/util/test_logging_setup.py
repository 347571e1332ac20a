"""Tests for log level resolution."""

import logging

import pytest

from together.config import Settings
from together.util.logging import resolve_level, setup_logging


def _settings(**kwargs) -> Settings:
    return Settings(
        platform={"url": "http://platform.test", "anon_key": "anon"}, **kwargs
    )


class TestResolveLevel:
    """Tests for resolve_level."""

    @pytest.mark.parametrize(
        ("debug", "expected"), [(True, logging.DEBUG), (False, logging.INFO)]
    )
    def test_follows_debug_flag(self, debug, expected):
        assert resolve_level(_settings(debug=debug)) == expected

    def test_override_wins_over_debug(self):
        # Arrange
        settings = _settings(debug=True, observability={"log_level": "warning"})

        # Act
        level = resolve_level(settings)

        # Assert
        assert level == logging.WARNING


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_payment_client_logs_stay_quiet_in_debug(self):
        # Arrange
        settings = _settings(debug=True)

        # Act
        setup_logging(settings)

        # Assert
        assert logging.getLogger("together").level == logging.DEBUG
        assert logging.getLogger("stripe").level == logging.WARNING

    def test_guard_redirects_can_be_silenced(self):
        # Arrange
        settings = _settings(observability={"log_guard_redirects": False})

        # Act
        setup_logging(settings)

        # Assert
        guard = logging.getLogger("together.interface.api.guard")
        assert guard.level == logging.WARNING
