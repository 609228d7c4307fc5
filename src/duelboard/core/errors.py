"""Exception hierarchy shared by all layers."""

from __future__ import annotations


class DuelboardError(Exception):
    """Base class for all duelboard errors."""


class InvalidMoveError(DuelboardError):
    """A move addresses a cell outside the board."""


class TransportError(DuelboardError):
    """The simulation server could not be reached or answered garbage."""
