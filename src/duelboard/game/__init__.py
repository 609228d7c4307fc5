"""Game management layer - session controller, game state, scheduling.

Quick start::

    from duelboard.game import QtScheduler, SessionController
    from duelboard.network import LocalNetworkService, random_match

    scheduler = QtScheduler()
    network = LocalNetworkService(random_match(seed=1), scheduler)
    session = SessionController(network, scheduler)
    session.submit_programs("black program", "white program")
"""

from duelboard.game.interfaces import (
    ApplyOutcome,
    INetworkService,
    IScheduler,
    SessionPhase,
    StartFailure,
    StartResult,
)
from duelboard.game.scheduler import ManualScheduler, QtScheduler
from duelboard.game.session import SessionController, SessionEvents
from duelboard.game.settings import SessionSettings
from duelboard.game.state import GameState

__all__ = [
    # Interfaces
    "ApplyOutcome",
    "INetworkService",
    "IScheduler",
    "SessionPhase",
    "StartFailure",
    "StartResult",
    # Concrete
    "GameState",
    "ManualScheduler",
    "QtScheduler",
    "SessionController",
    "SessionEvents",
    "SessionSettings",
]
