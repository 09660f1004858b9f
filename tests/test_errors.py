"""Tests for the exception hierarchy and error handling helpers."""

import logging
from unittest.mock import Mock

import pytest

from retint.exceptions import (
    CatalogInvalidError,
    ConfigurationError,
    PageErrorGuard,
    RetintError,
    SecurityError,
    StylesheetAccessError,
    ThemeError,
    ThemeNotFoundError,
    collect_errors,
    format_error_for_display,
)
from retint.utils import ObserverManager


@pytest.mark.unit
class TestExceptions:
    """Test messages and the hierarchy."""

    def test_hierarchy(self):
        assert issubclass(ThemeNotFoundError, ThemeError)
        assert issubclass(CatalogInvalidError, ThemeError)
        assert issubclass(ConfigurationError, RetintError)
        assert issubclass(SecurityError, RetintError)
        assert issubclass(StylesheetAccessError, RetintError)

    def test_full_message(self):
        error = ThemeNotFoundError("sepia", ["light", "dark"])

        assert str(error) == "Unknown theme 'sepia'"
        assert error.recoverable
        assert error.get_full_message() == (
            "Unknown theme 'sepia'\n\nSuggestion: Available themes: light, dark"
        )

    def test_technical_message_defaults_to_user_message(self):
        error = RetintError("Something broke")
        assert error.technical_message == "Something broke"
        assert error.get_full_message() == "Something broke"

    def test_format_for_display(self):
        assert format_error_for_display(ThemeNotFoundError("x")) == (
            "Unknown theme 'x'",
            "Run 'retint themes' to see available themes",
        )
        assert format_error_for_display(ValueError("bad")) == ("ValueError: bad", None)


@pytest.mark.unit
class TestHandlers:
    """Test the page error guard and the collector."""

    def test_page_error_guard_suppresses_and_records(self, caplog):
        with caplog.at_level(logging.DEBUG), PageErrorGuard("rule 'a'") as guard:
            raise ValueError("bad color")

        assert guard.failed
        assert isinstance(guard.error, ValueError)
        assert "Skipped rule 'a': ValueError: bad color" in caplog.text

    def test_page_error_guard_uses_technical_message(self, caplog):
        with caplog.at_level(logging.WARNING), PageErrorGuard("stylesheet", logging.WARNING):
            raise StylesheetAccessError("https://cdn.example/a.css", "blocked")

        assert "Skipped stylesheet:" in caplog.text
        assert "blocked" in caplog.text

    def test_page_error_guard_clean_exit(self):
        with PageErrorGuard("rule 'a'") as guard:
            pass
        assert not guard.failed

    def test_page_error_guard_lets_interrupts_through(self):
        with pytest.raises(KeyboardInterrupt), PageErrorGuard("rule 'a'"):
            raise KeyboardInterrupt

    def test_collect_errors(self):
        collector = collect_errors("rewrite stylesheets")

        with collector.try_operation("a.css"):
            pass
        with collector.try_operation("b.css"):
            raise StylesheetAccessError("b.css", "No such file")

        assert collector.has_errors
        assert collector.error_count == 1
        assert collector.success_count == 1
        summary = collector.get_summary()
        assert summary.startswith("Failed 1 of 2 operations:")
        assert "b.css" in summary

    def test_collect_errors_success(self):
        collector = collect_errors("rewrite stylesheets")
        with collector.try_operation("a.css"):
            pass
        assert collector.get_summary() == "All operations completed successfully (1 total)"


@pytest.mark.unit
class TestObserverManager:
    """Test observer registration and notification."""

    def test_register_is_idempotent(self):
        manager = ObserverManager()
        observer = Mock()

        manager.register(observer)
        manager.register(observer)

        assert len(manager) == 1
        assert observer in manager

    def test_notify(self):
        manager = ObserverManager()
        observer = Mock()
        manager.register(observer)

        manager.notify("on_engine_event", "event", theme_id="dark")

        observer.on_engine_event.assert_called_once_with("event", theme_id="dark")

    def test_failing_observer_is_isolated(self):
        manager = ObserverManager()
        failing = Mock()
        failing.on_engine_event.side_effect = RuntimeError("boom")
        other = Mock()
        manager.register(failing)
        manager.register(other)

        manager.notify("on_engine_event", "event")

        other.on_engine_event.assert_called_once_with("event")

    def test_missing_callback(self):
        manager = ObserverManager()
        manager.register(object())
        manager.notify("on_engine_event")

    def test_unregister_and_clear(self):
        manager = ObserverManager()
        observer = Mock()
        manager.register(observer)

        manager.unregister(observer)
        assert not manager

        manager.register(observer)
        manager.clear()
        assert len(manager) == 0
