from __future__ import annotations

import dataclasses
import itertools
from collections.abc import Iterable


@dataclasses.dataclass(frozen=True)
class LineRange:
    start: int
    end: int

    def __str__(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"

    def __iter__(self):
        return iter(range(self.start, self.end + 1))


def compress(values: Iterable[int]) -> list[LineRange]:
    """
    Given line numbers in any order, possibly repeated, return the smallest
    list of ascending, non-adjacent ranges (start, included end) covering
    exactly those numbers.

    >>> [str(r) for r in compress({1, 2, 4, 5, 7})]
    ['1-2', '4-5', '7']
    """
    ranges: list[LineRange] = []
    # Within a run of consecutive values, value - index is constant
    for _, contiguous_group in itertools.groupby(
        zip(sorted(set(values)), itertools.count(1)), lambda x: x[0] - x[1]
    ):
        grouped_values = (e[0] for e in contiguous_group)
        first = next(grouped_values)
        try:
            *_, last = grouped_values
        except ValueError:
            last = first
        ranges.append(LineRange(start=first, end=last))

    return ranges


def format_ranges(ranges: Iterable[LineRange]) -> str:
    return ",".join(str(r) for r in ranges)
