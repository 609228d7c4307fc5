"""Network collaborators: the local in-process server and the Qt thread bridge."""

from duelboard.network.local import (
    LocalNetworkService,
    LocalSimulationServer,
    MatchRecord,
    check_program,
    random_match,
)
from duelboard.network.qt_bridge import SimulationWorker, ThreadedNetworkService

__all__ = [
    "LocalNetworkService",
    "LocalSimulationServer",
    "MatchRecord",
    "SimulationWorker",
    "ThreadedNetworkService",
    "check_program",
    "random_match",
]
