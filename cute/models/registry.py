"""Registry of named test functions."""

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from cute.errors import DuplicateTestError

type TestEntry = Callable[[], object]
type TestHook = Callable[[str], object]


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """A named, zero-argument unit of test logic."""

    __test__ = False

    name: str
    entry: TestEntry = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class TestRegistry:
    """Ordered, immutable list of test cases.

    Iteration order is registration order. It decides execution order, the
    tie-break between ambiguous selections and the order of summaries.
    """

    __test__ = False

    tests: Sequence[TestCase]
    setup: TestHook | None = field(default=None, repr=False)
    teardown: TestHook | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for test in self.tests:
            if test.name in seen:
                raise DuplicateTestError(test.name)
            seen.add(test.name)
        object.__setattr__(self, "tests", tuple(self.tests))

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str, TestEntry] | tuple[None, None] | None],
        *,
        setup: TestHook | None = None,
        teardown: TestHook | None = None,
    ) -> "TestRegistry":
        """Build a registry from ``(name, entry)`` pairs.

        The sequence may be terminated by a sentinel (``None`` or
        ``(None, None)``); entries after it are ignored.
        """
        tests: list[TestCase] = []
        for pair in pairs:
            if pair is None or pair[0] is None or pair[1] is None:
                break
            name, entry = pair
            tests.append(TestCase(name=name, entry=entry))
        return cls(tests=tests, setup=setup, teardown=teardown)

    def __iter__(self) -> Iterator[TestCase]:
        return iter(self.tests)

    def __len__(self) -> int:
        return len(self.tests)

    def __getitem__(self, index: int) -> TestCase:
        return self.tests[index]

    @property
    def names(self) -> Sequence[str]:
        return [test.name for test in self.tests]
