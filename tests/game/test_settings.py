"""Tests for SessionSettings."""

from __future__ import annotations

import pytest

from duelboard.game.settings import SessionSettings


class TestSessionSettings:
    def test_defaults(self) -> None:
        settings = SessionSettings()
        assert settings.poll_interval_ms == 400
        assert settings.frame_interval_ms == 400
        assert settings.max_poll_retries == 1
        assert settings.board_size == 8

    @pytest.mark.parametrize(
        "field",
        ["poll_interval_ms", "frame_interval_ms", "max_poll_retries", "retry_backoff_ms"],
    )
    def test_negative_values_rejected(self, field: str) -> None:
        with pytest.raises(ValueError, match=field):
            SessionSettings(**{field: -1})

    def test_board_size_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            SessionSettings(board_size=0)

    def test_retry_delay_doubles(self) -> None:
        settings = SessionSettings(retry_backoff_ms=250)
        assert [settings.retry_delay_ms(n) for n in (1, 2, 3)] == [250, 500, 1000]
