"""Data classes for the agecensus package."""

from abc import abstractmethod
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Callable, TypeAlias


OUTPUT_FORMAT = "{position}:{value}={count}"  # position:age=total


class AgeInputIterator(Iterator[int]):
    """Source of ages for a single region.

    Implementations may hold resources (open files, connections...) from the moment they are created, and must
    release them in `close`. Consumers are expected to call `close` exactly once, whatever happens while iterating.
    """

    closed: bool = False

    def __iter__(self) -> "AgeInputIterator":
        return self

    @abstractmethod
    def __next__(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """
        Release any resource held by this source.
        """
        raise NotImplementedError

    def __enter__(self) -> "AgeInputIterator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class IterableAgeInput(AgeInputIterator):
    """Wraps any iterable of ints into an `AgeInputIterator`.

    Args:
        ages: the ages to produce
        on_close: optional callback invoked when the source is released
    """

    def __init__(self, ages: Iterable[int], on_close: Callable[[], None] | None = None):
        self._ages = iter(ages)
        self._on_close = on_close
        self.closed = False

    def __next__(self) -> int:
        return next(self._ages)

    def close(self) -> None:
        self.closed = True
        if self._on_close:
            self._on_close()


AgeSourceFactory: TypeAlias = Callable[[str], AgeInputIterator | None]


class FrequencyTable(Counter):
    """
    Maps an age to the number of times it was observed.
    Only valid (non-negative) ages are ever recorded, so every stored count is > 0.
    """

    def record(self, age: int) -> bool:
        """
            Count one observation.
        Args:
          age: the observed value

        Returns: whether the value was counted. Negative ages are skipped.

        """
        if age < 0:
            return False
        self[age] += 1
        return True

    def merge(self, other: "FrequencyTable") -> "FrequencyTable":
        """
            Key-wise sum of two tables. Neither input is modified.
        Args:
          other: table to merge with

        Returns: a new table holding the union of keys and the summed counts

        """
        result = FrequencyTable(self)
        result += other
        return result

    def __add__(self, other):
        if not isinstance(other, Counter):
            return NotImplemented
        return self.merge(other)

    def __iadd__(self, other):
        for age, count in other.items():
            if count > 0:
                self[age] += count
        return self

    def __repr__(self):
        return f"FrequencyTable({dict(self)})"


@dataclass(frozen=True)
class RankedEntry:
    """An age and its total count, with the 1-based position of its count tier."""

    position: int
    value: int
    count: int

    def format(self) -> str:
        return OUTPUT_FORMAT.format(position=self.position, value=self.value, count=self.count)
