"""Groups: classified, inclusive index ranges into an object set."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from halfwit.bisection.behavior import Behavior
from halfwit.bisection.errors import (
    ConstructionError,
    InvariantError,
    SplitError,
)


@dataclass
class Group:
    """An inclusive range of indices into a Bisection's objects,
    together with what is known about their behavior.

    A Group owns no objects; the Bisection does. ``first`` and
    ``last`` are both inclusive, so a Group is never empty.

    Ordering
    --------
    Groups order by which should be tested first; the greatest
    group is tested next.

    1. Behavior: unknown > dominant > recessive
    2. Size: larger > smaller
    3. Position: earlier > later

    >>> Group(1, 2) > Group(1, 2, Behavior.DOMINANT)
    True
    >>> Group(1, 4) > Group(1, 2)
    True
    >>> Group(1, 2) > Group(2, 3)
    True

    Two distinct groups that tie on all three keys cover the same
    range with the same behavior, which cannot happen within one
    partition. Comparing them raises InvariantError, even though
    such copies are equal under ==: a Group only orders against
    itself or against a different range.
    """

    first: int
    last: int
    behavior: Behavior = Behavior.UNKNOWN

    def __post_init__(self):
        if self.first < 0:
            raise ConstructionError(
                f"Group index must not be negative, got {self.first}"
            )
        if self.first > self.last:
            raise ConstructionError(
                f"Group first index {self.first} is past last "
                f"index {self.last}"
            )

    def size(self) -> int:
        """Number of objects in this group."""
        return self.last - self.first + 1

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.first, self.last + 1))

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.first <= index <= self.last

    def split(self) -> tuple[Group, Group]:
        """Split into two halves; the lower half gets the odd element.

        Children of a recessive group are recessive, since a
        recessive group cannot contain a dominant object. All other
        children start out unknown. Group(7, 9) splits into
        Group(7, 8) and Group(9, 9).

        Raises:
            SplitError: If the group holds a single object
        """
        if self.first == self.last:
            raise SplitError(
                f"Cannot split single-object group {self.describe()}"
            )

        if self.behavior is Behavior.RECESSIVE:
            behavior = Behavior.RECESSIVE
        else:
            behavior = Behavior.UNKNOWN

        mid = self.first + (self.last - self.first) // 2
        return (
            Group(self.first, mid, behavior),
            Group(mid + 1, self.last, behavior),
        )

    def describe(self) -> str:
        """Short human-readable form, e.g. ``[3..7]``."""
        if self.first == self.last:
            return f"[{self.first}]"
        return f"[{self.first}..{self.last}]"

    def _priority(self) -> tuple[int, int, int]:
        return (self.behavior.rank, self.size(), -self.first)

    def _compare(self, other: Group) -> int:
        mine = self._priority()
        theirs = other._priority()
        if mine != theirs:
            return 1 if mine > theirs else -1
        if self is other:
            return 0
        raise InvariantError(
            f"Groups {self.describe()} and {other.describe()} tie on "
            f"behavior, size and position"
        )

    def __lt__(self, other: Group) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self._compare(other) < 0

    def __le__(self, other: Group) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self._compare(other) <= 0

    def __gt__(self, other: Group) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self._compare(other) > 0

    def __ge__(self, other: Group) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self._compare(other) >= 0
