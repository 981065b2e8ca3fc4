"""Tests for the assertion switch and assert_matches()."""

import pytest
from structlog.testing import capture_logs

import shapecheck
from shapecheck import (
    PatternAssertionError,
    ValidationContext,
    assert_matches,
    disable,
    enable,
    get_settings,
    is_enabled,
    required,
)


class TestProcessWideSwitch:
    """enable() / disable() flip the shared default context."""

    def test_disabled_by_default(self):
        assert is_enabled() is False
        assert assert_matches("foo", "bar") is None

    def test_enable(self):
        assert assert_matches("foo", "bar") is None
        enable()
        assert is_enabled() is True
        with pytest.raises(PatternAssertionError):
            assert_matches("foo", "bar")

    def test_disable_again(self):
        enable()
        disable()
        assert assert_matches("foo", "bar") is None

    def test_passing_data_returns_none(self):
        enable()
        assert assert_matches({"foo": "bar"}, {"foo": required(str)}) is None

    def test_disabled_never_calls_engine(self, monkeypatch):
        calls = []
        monkeypatch.setattr("shapecheck.assertions.matches", lambda *args: calls.append(args))
        assert_matches("foo", "bar")
        assert calls == []

    def test_toggle_is_logged(self):
        with capture_logs() as logs:
            enable()
            disable()
        assert [entry["event"] for entry in logs] == ["assertions_enabled", "assertions_disabled"]


class TestPatternAssertionError:
    """The raised error carries the problems and the data."""

    def test_payload(self):
        enable()
        source = {"client": {"id": 5}}
        with pytest.raises(PatternAssertionError) as excinfo:
            assert_matches(source, {"client": {"id": str, "secret": required()}})

        error = excinfo.value
        assert error.data is source
        assert [p.path for p in error.problems] == [".client.id", ".client.secret"]
        assert str(error).splitlines() == [
            "Assertions failed",
            " - .client.id: data is not a string",
            " - .client.secret: data is required",
        ]

    def test_root_problem_is_labelled(self):
        enable()
        with pytest.raises(PatternAssertionError, match="<root>: data and pattern are not equal"):
            assert_matches("foo", "bar")

    def test_is_an_assertion_error(self):
        enable()
        with pytest.raises(AssertionError):
            assert_matches(1, str)

    def test_failure_is_logged(self):
        enable()
        with capture_logs() as logs:
            with pytest.raises(PatternAssertionError):
                assert_matches({}, {"a": required(), "b": required()})
        failures = [entry for entry in logs if entry["event"] == "assertion_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "warning"
        assert failures[0]["total_problems"] == 2
        assert failures[0]["paths"] == [".a", ".b"]


class TestValidationContext:
    """Explicit contexts are independent of the process-wide switch."""

    def test_explicit_context(self):
        context = ValidationContext(enabled=True)
        assert is_enabled() is False
        with pytest.raises(PatternAssertionError):
            context.assert_matches("foo", "bar")
        # The default context is untouched
        assert assert_matches("foo", "bar") is None

    def test_context_toggle(self):
        context = ValidationContext(enabled=False)
        assert context.assert_matches("foo", "bar") is None
        context.enable()
        assert context.enabled is True
        with pytest.raises(PatternAssertionError):
            context.assert_matches("foo", "bar")
        context.disable()
        assert context.assert_matches("foo", "bar") is None

    def test_initial_state_from_settings(self, monkeypatch):
        monkeypatch.setenv("SHAPECHECK_ENABLED", "true")
        get_settings.cache_clear()
        assert ValidationContext().enabled is True

    def test_default_context_is_shared(self):
        shapecheck.default_context.enable()
        assert is_enabled() is True
