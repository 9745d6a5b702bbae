"""Responder lifecycle states and their transitions.

A responder moves ``UNBOUND -> LISTENING -> STOPPED``. It may also be
closed before it ever binds (``UNBOUND -> STOPPED``). There is no way back.
"""

from __future__ import annotations

from enum import StrEnum


class ResponderState(StrEnum):
    """Lifecycle of a responder's listening socket."""

    UNBOUND = "unbound"
    LISTENING = "listening"
    STOPPED = "stopped"


TRANSITIONS: dict[ResponderState, frozenset[ResponderState]] = {
    ResponderState.UNBOUND: frozenset({ResponderState.LISTENING, ResponderState.STOPPED}),
    ResponderState.LISTENING: frozenset({ResponderState.STOPPED}),
    ResponderState.STOPPED: frozenset(),
}


def is_valid_transition(current: ResponderState, target: ResponderState) -> bool:
    """Check whether *current* may move to *target*."""
    return target in TRANSITIONS[current]


def transition(current: ResponderState, target: ResponderState) -> ResponderState:
    """Return *target* if the move is legal, else raise ValueError."""
    if not is_valid_transition(current, target):
        msg = f"Invalid responder transition: {current} -> {target}"
        raise ValueError(msg)
    return target
