"""Tests for the primary -> fallback query combinator."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from hydromap.diagnostics import DiagnosticLog
from hydromap.errors import LayerFetchError, TransportError
from hydromap.services.fallback import query_with_fallback


class TestQueryWithFallback:
    """Fallback runs exactly when the primary fails or is rejected."""

    def test_accepted_primary_skips_fallback(self) -> None:
        fallback = Mock(return_value="fallback")
        result = query_with_fallback(lambda: "primary", fallback, accept=lambda r: True)
        assert result == "primary"
        fallback.assert_not_called()

    def test_no_predicate_accepts_primary(self) -> None:
        fallback = Mock()
        assert query_with_fallback(lambda: [], fallback) == []
        fallback.assert_not_called()

    def test_rejected_primary_runs_fallback(self) -> None:
        fallback = Mock(return_value=["B"])
        result = query_with_fallback(lambda: ["A"], fallback, accept=lambda r: r == ["B"])
        assert result == ["B"]
        fallback.assert_called_once_with()

    def test_primary_error_runs_fallback(self) -> None:
        def primary() -> list[str]:
            raise TransportError("https://example.com/items", status=400)

        assert query_with_fallback(primary, lambda: ["ok"]) == ["ok"]

    def test_accept_not_called_when_primary_fails(self) -> None:
        accept = Mock(return_value=True)

        def primary() -> str:
            raise TransportError("https://example.com/items")

        query_with_fallback(primary, lambda: "ok", accept=accept)
        accept.assert_not_called()

    def test_fallback_error_propagates(self) -> None:
        def fallback() -> str:
            raise TransportError("https://example.com/items", status=503, station_id="X")

        with pytest.raises(TransportError) as exc_info:
            query_with_fallback(lambda: "bad", fallback, accept=lambda r: False)
        assert exc_info.value.status == 503
        assert exc_info.value.station_id == "X"

    def test_unrelated_primary_error_propagates(self) -> None:
        """Only hydromap errors trigger the fallback; bugs surface."""

        def primary() -> str:
            raise KeyError("oops")

        fallback = Mock()
        with pytest.raises(KeyError):
            query_with_fallback(primary, fallback)
        fallback.assert_not_called()

    def test_any_hydromap_error_triggers_fallback(self) -> None:
        def primary() -> str:
            raise LayerFetchError("https://example.com/0", 500)

        assert query_with_fallback(primary, lambda: "ok") == "ok"


class TestFallbackDiagnostics:
    """A warning is recorded whenever the fallback runs."""

    def test_rejection_logged(self) -> None:
        log = DiagnosticLog()
        query_with_fallback(
            lambda: [], lambda: [1], accept=bool, label="station meta X", diagnostics=log
        )
        assert len(log) == 1
        assert "station meta X" in log.lines[0]
        assert "did not return the requested station" in log.lines[0]

    def test_failure_logged_with_cause(self) -> None:
        log = DiagnosticLog()

        def primary() -> list[int]:
            raise TransportError("https://example.com/items", status=400)

        query_with_fallback(primary, lambda: [1], label="realtime X", diagnostics=log)
        assert "HTTP 400" in log.lines[0]
        assert log.lines[0].startswith("WARNING: realtime X")

    def test_nothing_logged_on_success(self) -> None:
        log = DiagnosticLog()
        query_with_fallback(lambda: [1], lambda: [2], accept=bool, diagnostics=log)
        assert len(log) == 0
