"""Canonical state transition helpers."""

from __future__ import annotations

from typing import Generic, Hashable, TypeVar

S = TypeVar("S", bound=Hashable)


class InvalidTransitionError(ValueError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine(Generic[S]):
    """Simple in-memory state machine over a declared transition table."""

    def __init__(self, transitions: dict[S, set[S]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: S, target: S) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: S, target: S) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")

    def is_terminal(self, state: S) -> bool:
        return not self._transitions.get(state)
