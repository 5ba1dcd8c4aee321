"""Unit tests for femtologging integration helpers.

Run with:
    pytest tests/unit/test_logging.py
"""

from __future__ import annotations

import pytest

from dorametrix.logging import (
    LogLevel,
    configure_logging,
    format_event,
    log_debug,
    log_event,
    log_warning,
    normalize_log_level,
)


class _FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        del stack_info
        self.calls.append((level, message, exc_info))
        return message


@pytest.mark.parametrize(
    ("input_level", "expected_level", "expected_invalid"),
    [
        ("warning", "WARNING", False),
        (" trace ", "TRACE", False),
        (None, "INFO", True),
        ("", "INFO", True),
        ("verbose", "INFO", True),
    ],
)
def test_normalize_log_level(
    input_level: str | None,
    expected_level: str,
    *,
    expected_invalid: bool,
) -> None:
    """Unknown levels fall back to INFO and are flagged."""
    level, invalid = normalize_log_level(input_level)

    assert level == expected_level, (
        f"Expected {input_level!r} to normalize to {expected_level}."
    )
    assert invalid is expected_invalid


class TestFormatEvent:
    """Tests for structured event rendering."""

    def test_fields_follow_keyword_order(self) -> None:
        """Pairs appear in the order they were passed."""
        message = format_event(
            "metrics.deployment.skipped", {"repo_name": "octo/reef", "reason": "x"}
        )

        assert message == "[metrics.deployment.skipped] repo_name=octo/reef reason=x"

    def test_event_without_fields(self) -> None:
        """An event with no context renders only its identifier."""
        assert format_event("ingestion.webhook.ignored", {}) == (
            "[ingestion.webhook.ignored]"
        )


def test_log_event_passes_level_and_exc_info() -> None:
    """log_event renders the event and attaches the exception."""
    logger = _FakeLogger()
    exc = ValueError("boom")

    log_event(
        logger,
        LogLevel.ERROR,
        "ingestion.webhook.rejected",
        exc_info=exc,
        provider="github",
    )

    assert logger.calls == [
        ("ERROR", "[ingestion.webhook.rejected] provider=github", exc)
    ]


@pytest.mark.parametrize(
    ("helper", "level"),
    [(log_debug, "DEBUG"), (log_warning, "WARNING")],
)
def test_template_helpers_format_before_emitting(helper: object, level: str) -> None:
    """Percent-style templates are formatted before reaching the logger."""
    logger = _FakeLogger()

    helper(logger, "deployment %s took %d", "d1", 3)  # type: ignore[operator]

    assert logger.calls == [(level, "deployment d1 took 3", None)]


@pytest.mark.parametrize(
    ("input_level", "expected_normalized"),
    [("DEBUG", "DEBUG"), ("nope", "INFO")],
)
def test_configure_logging(
    monkeypatch: pytest.MonkeyPatch,
    input_level: str,
    expected_normalized: str,
) -> None:
    """configure_logging passes the normalized level to basicConfig."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("dorametrix.logging.basicConfig", fake_basic_config)

    normalized, _invalid = configure_logging(input_level)

    assert normalized == expected_normalized
    assert captured == {"level": expected_normalized, "force": False}
