"""Capability an object needs in order to take part in a bisection."""

from typing import Protocol, runtime_checkable

from halfwit.bisection.behavior import State


@runtime_checkable
class Stateful(Protocol):
    """Something that can be enabled or disabled.

    set_state() performs the real side effect (a file appears or
    disappears, a mod is switched on or off) and may raise when it
    cannot. state() returns the last state that was set, without
    checking the real thing again.
    """

    def set_state(self, state: State) -> None:
        ...

    def state(self) -> State:
        ...
