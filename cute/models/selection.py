"""Selection of registered tests marked to run."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from cute.models.registry import TestCase, TestRegistry


@dataclass(kw_only=True)
class RunSelection:
    """Indices into a registry marked "to run".

    Marking is idempotent, an index matched by several patterns is kept once.
    """

    registry: TestRegistry
    _marked: set[int] = field(default_factory=set, repr=False)

    def mark(self, index: int) -> bool:
        """Mark a test, returning False when it was already marked."""
        if index in self._marked:
            return False
        self._marked.add(index)
        return True

    def __contains__(self, index: object) -> bool:
        return index in self._marked

    def __len__(self) -> int:
        return len(self._marked)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._marked))

    def effective(self, *, skip: bool) -> Sequence[tuple[int, TestCase]]:
        """Return the tests to execute, in registration order.

        Without skip mode the marked tests run, or every test when nothing
        is marked. In skip mode the complement of the marked tests runs.
        """
        if skip:
            return [
                (index, test)
                for index, test in enumerate(self.registry)
                if index not in self._marked
            ]
        if not self._marked:
            return list(enumerate(self.registry))
        return [
            (index, test)
            for index, test in enumerate(self.registry)
            if index in self._marked
        ]
