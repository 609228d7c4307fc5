"""Session timing and retry settings."""

from __future__ import annotations

from dataclasses import dataclass

from duelboard.core.board import DEFAULT_BOARD_SIZE


@dataclass
class SessionSettings:
    """All tunables of a session.

    Args:
        poll_interval_ms: Pause between a report arriving and the next query.
        frame_interval_ms: Pause between replay frames.
        max_poll_retries: Retries of a failed query before the session is lost.
        retry_backoff_ms: Delay before the first retry, doubled per retry.
        board_size: Side length of the square board.
    """

    poll_interval_ms: int = 400
    frame_interval_ms: int = 400
    max_poll_retries: int = 1
    retry_backoff_ms: int = 400
    board_size: int = DEFAULT_BOARD_SIZE

    def __post_init__(self) -> None:
        for name in (
            "poll_interval_ms",
            "frame_interval_ms",
            "max_poll_retries",
            "retry_backoff_ms",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.board_size <= 0:
            raise ValueError("board_size must be >= 1")

    def retry_delay_ms(self, attempt: int) -> int:
        """Backoff before retry number *attempt* (1-based)."""
        return self.retry_backoff_ms * (2 ** max(0, attempt - 1))
