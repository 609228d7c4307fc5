"""Internationalisation strings for the duelboard UI.

Usage::

    from duelboard.ui.i18n import t, set_language

    set_language("Russian")
    print(t().btn_replay)          # "Повтор"
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Main window ──────────────────────────────────────────────────────
    window_title: str

    # Status line per session phase
    phase_idle: str
    phase_starting: str
    phase_polling: str  # "Simulating... turn {turn}"
    phase_stopped: str  # "Game over - {result}"
    phase_replaying: str  # "Replaying turn {turn}/{total}"
    phase_error: str  # "Session lost: {msg}"

    result_black_won: str
    result_white_won: str
    result_draw: str
    score: str  # "Black {black} : {white} White"

    # Notices
    notice_title: str
    notice_compile_failed: str
    notice_transport_failed: str  # "Could not reach the server:\n{msg}"

    # ── ProgramPanel ─────────────────────────────────────────────────────
    program_black: str
    program_white: str

    # ── ControlPanel ─────────────────────────────────────────────────────
    btn_submit: str
    btn_reset: str
    btn_replay: str


# ── Built-in locales ─────────────────────────────────────────────────────────

_EN = Strings(
    window_title="Duelboard",
    phase_idle="Ready",
    phase_starting="Starting simulation...",
    phase_polling="Simulating... turn {turn}",
    phase_stopped="Game over - {result}",
    phase_replaying="Replaying turn {turn}/{total}",
    phase_error="Session lost: {msg}",
    result_black_won="Black wins.",
    result_white_won="White wins.",
    result_draw="Draw.",
    score="Black {black} : {white} White",
    notice_title="Simulation",
    notice_compile_failed="Your code does not compile!",
    notice_transport_failed="Could not reach the server:\n{msg}",
    program_black="Black program",
    program_white="White program",
    btn_submit="Submit",
    btn_reset="Reset",
    btn_replay="Replay",
)

_RU = Strings(
    window_title="Duelboard",
    phase_idle="Готово",
    phase_starting="Запуск симуляции...",
    phase_polling="Симуляция... ход {turn}",
    phase_stopped="Конец игры - {result}",
    phase_replaying="Повтор хода {turn}/{total}",
    phase_error="Сессия потеряна: {msg}",
    result_black_won="Победа чёрных.",
    result_white_won="Победа белых.",
    result_draw="Ничья.",
    score="Чёрные {black} : {white} Белые",
    notice_title="Симуляция",
    notice_compile_failed="Ваш код не компилируется!",
    notice_transport_failed="Сервер недоступен:\n{msg}",
    program_black="Программа чёрных",
    program_white="Программа белых",
    btn_submit="Отправить",
    btn_reset="Сброс",
    btn_replay="Повтор",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Russian": _RU,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active locale strings."""
    return _current


def set_language(language: str) -> None:
    """Switch the global locale. Unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
