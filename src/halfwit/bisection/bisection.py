"""Search for the objects responsible for dominant behavior.

Given a set of objects and a test that can run against any subset
of them, find every object that makes the test show dominant
behavior. The test must show recessive behavior whenever the
enabled subset holds only recessive objects.

Starting with the whole set, test a group. If the test is
recessive, every object in the group is recessive and the group
is done. If it is dominant, split the group in half and test both
halves; a dominant single object is a culprit. Because dominant
groups are always split rather than dropped, the search keeps
going after the first culprit until all of them are isolated.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from halfwit.bisection.behavior import Behavior, State
from halfwit.bisection.errors import ConstructionError, ObjectStateError
from halfwit.bisection.group import Group
from halfwit.bisection.stateful import Stateful
from halfwit.core.log import logger

T = TypeVar("T", bound=Stateful)

# Runs the test against whatever is currently enabled;
# True means dominant behavior was observed.
TestFunc = Callable[[], bool]


class Bisection(Generic[T]):
    """An active bisection over a fixed sequence of objects.

    Holds the objects and the worklist of groups still to be tested.
    It knows nothing about what the test does; callers pass a
    TestFunc to step() or run().

    Args:
        objects: Objects to search, in a fixed order. Indices into
            this sequence are what Groups refer to.
        single_culprit: Assume the whole set is dominant and holds
            exactly one culprit. Only one half of each split is
            tested and the other half is inferred, which is plain
            binary search.

    Raises:
        ConstructionError: If objects is empty or an object does
            not implement Stateful
    """

    def __init__(self, objects: Sequence[T], single_culprit: bool = False):
        objects = list(objects)
        if not objects:
            raise ConstructionError("Cannot bisect an empty object set")
        for index, obj in enumerate(objects):
            if not isinstance(obj, Stateful):
                raise ConstructionError(
                    f"Object {index} ({obj!r}) does not support "
                    f"set_state() and state()"
                )

        self._objects = objects
        self.single_culprit = single_culprit
        self.groups: list[Group] = [Group(0, len(objects) - 1)]
        self.settled: list[Group] = []
        self.tests_run = 0
        self._siblings: dict[tuple[int, int], Group] = {}

        if single_culprit:
            self._classify(self.groups[0], Behavior.DOMINANT)

    @property
    def objects(self) -> tuple[T, ...]:
        return tuple(self._objects)

    @property
    def done(self) -> bool:
        """True once no group is left with unknown behavior."""
        return not any(
            group.behavior is Behavior.UNKNOWN for group in self.groups
        )

    @property
    def culprits(self) -> list[int]:
        """Indices of the objects confirmed dominant so far."""
        return sorted(
            group.first
            for group in self.settled
            if group.behavior is Behavior.DOMINANT
        )

    def culprit_objects(self) -> list[T]:
        return [self._objects[index] for index in self.culprits]

    def set_group_state(self, group: Group, state: State) -> None:
        """Set every object in group to state.

        This is the only place object state is changed.

        Raises:
            ConstructionError: If group reaches outside the object set
            ObjectStateError: If an object could not be switched
        """
        if group.last >= len(self._objects):
            raise ConstructionError(
                f"Group {group.describe()} is outside the object set "
                f"of {len(self._objects)} objects"
            )

        for index in group:
            try:
                self._objects[index].set_state(state)
            except ObjectStateError:
                raise
            except Exception as e:
                raise ObjectStateError(
                    f"Could not set object {index} to {state.value}: {e}",
                    index=index,
                ) from e

    def apply(self, group: Group) -> None:
        """Enable exactly the objects in group and disable the rest."""
        logger.trace(f"Applying {group.describe()}")
        if group.first > 0:
            self.set_group_state(Group(0, group.first - 1), State.DISABLED)
        if group.last < len(self._objects) - 1:
            self.set_group_state(
                Group(group.last + 1, len(self._objects) - 1),
                State.DISABLED,
            )
        self.set_group_state(group, State.ENABLED)

    def next_group(self) -> Group | None:
        """Highest-priority group that still needs testing, if any."""
        unknown = [
            group for group in self.groups
            if group.behavior is Behavior.UNKNOWN
        ]
        if not unknown:
            return None
        return max(unknown)

    def record(self, group: Group, dominant: bool) -> None:
        """Reclassify a tested group from the test's result.

        A recessive group is retired. A dominant single object is
        retired as a culprit. A larger dominant group is replaced
        by its two halves.

        In single-culprit mode the untested sibling of group is
        classified with the opposite behavior.
        """
        behavior = Behavior.DOMINANT if dominant else Behavior.RECESSIVE
        self._classify(group, behavior)

        if not self.single_culprit:
            return

        sibling = self._siblings.pop((group.first, group.last), None)
        if sibling is None:
            return
        self._siblings.pop((sibling.first, sibling.last), None)
        if sibling.behavior is not Behavior.UNKNOWN:
            return

        inferred = Behavior.RECESSIVE if dominant else Behavior.DOMINANT
        logger.debug(
            f"Inferred {sibling.describe()} is {inferred.value}"
        )
        self._classify(sibling, inferred)

    def step(self, test: TestFunc) -> Group | None:
        """Test the next group and record the result.

        Returns:
            The group that was tested, or None if the search is done

        Raises:
            ObjectStateError: If the group could not be applied; the
                group stays in the worklist and no test is run
        """
        group = self.next_group()
        if group is None:
            return None

        self.apply(group)
        logger.info(
            f"Testing {group.describe()} ({group.size()} objects)",
            first=group.first,
            last=group.last,
        )
        dominant = bool(test())
        self.tests_run += 1
        self.record(group, dominant)
        return group

    def run(self, test: TestFunc) -> list[int]:
        """Run the search to completion.

        Returns:
            Sorted indices of every culprit
        """
        while self.step(test) is not None:
            pass

        logger.info(
            f"Bisection finished after {self.tests_run} tests, "
            f"{len(self.culprits)} culprit(s) found"
        )
        return self.culprits

    def run_baseline(self, test: TestFunc) -> bool:
        """Disable every object and run the test once.

        A usable test is recessive here.

        Returns:
            True if the test showed dominant behavior
        """
        self.set_group_state(Group(0, len(self._objects) - 1), State.DISABLED)
        return bool(test())

    def _classify(self, group: Group, behavior: Behavior) -> None:
        group.behavior = behavior
        self._retire(group)

        if behavior is Behavior.RECESSIVE:
            logger.debug(f"{group.describe()} is recessive")
            self.settled.append(group)
        elif group.size() == 1:
            logger.warn(f"Object {group.first} is dominant")
            self.settled.append(group)
        else:
            low, high = group.split()
            logger.debug(
                f"{group.describe()} is dominant, split into "
                f"{low.describe()} and {high.describe()}"
            )
            self.groups.extend((low, high))
            if self.single_culprit:
                self._siblings[(low.first, low.last)] = high
                self._siblings[(high.first, high.last)] = low

    def _retire(self, group: Group) -> None:
        for i, candidate in enumerate(self.groups):
            if candidate is group:
                del self.groups[i]
                return
