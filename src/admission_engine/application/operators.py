"""Relational operators using the Volcano iterator model.

This module implements the operators every analytical query is built
from: scan, filter, project, inner join, group-and-aggregate, sort,
limit (top-k) and distinct.

The Volcano model:
    - Each operator is an iterator with open(), next(), close() methods
    - Operators pull records from their children on demand
    - Blocking operators (sort, group, the build side of a join)
      materialize their input in open()

Queries do not wire operator trees by hand. They call the eager
functions at the bottom of this module (filter_records, inner_join,
group_aggregate, sort_records, top_k, distinct, project), each of which
runs a small operator pipeline to completion and returns a list, so
every intermediate result is a concrete, ordered sequence.

Ordering guarantees:
    - filter, project, distinct and limit preserve input order
    - join emits left records in order, each followed by its matches in
      right-input order
    - groups appear in the order their key was first seen
    - sort is stable
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Hashable, Iterable, Iterator, Sequence

EXHAUSTED: Any = object()
"""Returned by Operator.next() when no rows remain. ``None`` is a valid row."""


@dataclass
class Row:
    """A row of named values.

    Rows can be accessed by column name or index. Produced by
    GroupAggregateOperator with the group key under ``"key"``.
    """

    columns: list[str]
    values: list[Any]

    def __getitem__(self, key: str | int) -> Any:
        if isinstance(key, int):
            return self.values[key]
        try:
            idx = self.columns.index(key)
            return self.values[idx]
        except ValueError as e:
            raise KeyError(f"Column '{key}' not found") from e

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={v!r}" for c, v in zip(self.columns, self.values))
        return f"Row({pairs})"


class Operator(ABC):
    """Base class for executor operators (Volcano model)."""

    @abstractmethod
    def open(self) -> None:
        """Initialize the operator."""
        pass

    @abstractmethod
    def next(self) -> Any:
        """Return the next row or EXHAUSTED."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Clean up resources."""
        pass

    def __iter__(self) -> Iterator[Any]:
        """Allow iteration over operator results."""
        self.open()
        try:
            while True:
                row = self.next()
                if row is EXHAUSTED:
                    break
                yield row
        finally:
            self.close()


def _drain(child: Operator) -> list[Any]:
    """Pull every remaining row out of an already opened child."""
    rows = []
    while True:
        row = child.next()
        if row is EXHAUSTED:
            return rows
        rows.append(row)


class _KeyTable:
    """Mapping keyed by value equality.

    Hashable keys go to a dict; unhashable keys (lists, Rows) fall back
    to a linear list of (key, value) buckets compared with ``==``.
    """

    __slots__ = ("_hashed", "_unhashed")

    def __init__(self) -> None:
        self._hashed: dict[Hashable, Any] = {}
        self._unhashed: list[tuple[Any, Any]] = []

    def get(self, key: Any, default: Any = None) -> Any:
        try:
            return self._hashed.get(key, default)
        except TypeError:
            for bucket_key, value in self._unhashed:
                if bucket_key == key:
                    return value
            return default

    def setdefault(self, key: Any, default: Any) -> Any:
        try:
            return self._hashed.setdefault(key, default)
        except TypeError:
            for bucket_key, value in self._unhashed:
                if bucket_key == key:
                    return value
            self._unhashed.append((key, default))
            return default

    def __contains__(self, key: Any) -> bool:
        return self.get(key, EXHAUSTED) is not EXHAUSTED


class ScanOperator(Operator):
    """Sequential scan over an in-memory sequence."""

    def __init__(self, source: Iterable[Any]) -> None:
        self._source = source
        self._rows: Sequence[Any] = ()
        self._current_row = 0

    def open(self) -> None:
        self._rows = self._source if isinstance(self._source, Sequence) else list(self._source)
        self._current_row = 0

    def next(self) -> Any:
        if self._current_row >= len(self._rows):
            return EXHAUSTED
        row = self._rows[self._current_row]
        self._current_row += 1
        return row

    def close(self) -> None:
        self._rows = ()
        self._current_row = 0


class FilterOperator(Operator):
    """Filter operator that applies a predicate."""

    def __init__(self, child: Operator, predicate: Callable[[Any], bool]) -> None:
        self._child = child
        self._predicate = predicate

    def open(self) -> None:
        self._child.open()

    def next(self) -> Any:
        while True:
            row = self._child.next()
            if row is EXHAUSTED:
                return EXHAUSTED
            if self._predicate(row):
                return row

    def close(self) -> None:
        self._child.close()


class ProjectOperator(Operator):
    """Project operator that maps every row through a function."""

    def __init__(self, child: Operator, projection: Callable[[Any], Any]) -> None:
        self._child = child
        self._projection = projection

    def open(self) -> None:
        self._child.open()

    def next(self) -> Any:
        row = self._child.next()
        if row is EXHAUSTED:
            return EXHAUSTED
        return self._projection(row)

    def close(self) -> None:
        self._child.close()


class HashJoinOperator(Operator):
    """Inner equality join.

    The right input is the build side: open() hashes it into
    key -> matches, keeping matches in input order. The left input is
    then probed row by row, so output order is left order first and
    right order within one left row. Rows without a partner on the
    other side are dropped. Unhashable keys are matched by equality
    with a linear scan.
    """

    def __init__(
        self,
        left: Operator,
        right: Operator,
        left_key: Callable[[Any], Hashable],
        right_key: Callable[[Any], Hashable],
    ) -> None:
        self._left = left
        self._right = right
        self._left_key = left_key
        self._right_key = right_key
        self._table = _KeyTable()
        self._current_left: Any = EXHAUSTED
        self._matches: list[Any] = []
        self._match_idx = 0

    def open(self) -> None:
        self._right.open()
        self._table = _KeyTable()
        for row in _drain(self._right):
            self._table.setdefault(self._right_key(row), []).append(row)
        self._right.close()

        self._left.open()
        self._current_left = EXHAUSTED
        self._matches = []
        self._match_idx = 0

    def next(self) -> Any:
        while self._match_idx >= len(self._matches):
            self._current_left = self._left.next()
            if self._current_left is EXHAUSTED:
                return EXHAUSTED
            self._matches = self._table.get(self._left_key(self._current_left), [])
            self._match_idx = 0

        right = self._matches[self._match_idx]
        self._match_idx += 1
        return (self._current_left, right)

    def close(self) -> None:
        self._left.close()
        self._table = _KeyTable()
        self._matches = []


class AggregateFunc(Enum):
    """Aggregate functions."""

    COUNT = "COUNT"
    SUM = "SUM"
    AVG = "AVG"
    MIN = "MIN"
    MAX = "MAX"


@dataclass(frozen=True)
class AggregateSpec:
    """One aggregate column of a GroupAggregateOperator.

    Attributes:
        name: Output column name
        func: Aggregate function
        value: Extracts the aggregated value from a member row; not
            needed for COUNT
    """

    name: str
    func: AggregateFunc
    value: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if self.value is None and self.func != AggregateFunc.COUNT:
            raise ValueError(f"Aggregate '{self.name}' ({self.func.value}) needs a value extractor")


class _Accumulator:
    """Running state of one aggregate for one group."""

    __slots__ = ("count", "total", "best")

    def __init__(self) -> None:
        self.count = 0
        self.total: Any = 0
        self.best: Any = None

    def add(self, func: AggregateFunc, value: Any) -> None:
        self.count += 1
        if func in (AggregateFunc.SUM, AggregateFunc.AVG):
            self.total += value
        elif func == AggregateFunc.MAX:
            if self.best is None or value > self.best:
                self.best = value
        elif func == AggregateFunc.MIN:
            if self.best is None or value < self.best:
                self.best = value

    def result(self, func: AggregateFunc) -> Any:
        if func == AggregateFunc.COUNT:
            return self.count
        if func == AggregateFunc.SUM:
            return self.total
        if func == AggregateFunc.AVG:
            return self.total / self.count
        return self.best


class GroupAggregateOperator(Operator):
    """Hash aggregation with GROUP BY semantics.

    Emits one Row per distinct key, in the order each key first appeared
    in the input. Groups exist only for keys seen at least once.
    """

    def __init__(
        self,
        child: Operator,
        key: Callable[[Any], Hashable],
        aggregates: Sequence[AggregateSpec],
    ) -> None:
        if not aggregates:
            raise ValueError("GroupAggregateOperator needs at least one aggregate")
        self._child = child
        self._key = key
        self._aggregates = list(aggregates)
        self._columns = ["key", *(spec.name for spec in self._aggregates)]
        self._results: list[Row] = []
        self._current_idx = 0

    def open(self) -> None:
        self._child.open()

        ordered_groups: list[tuple[Hashable, list[_Accumulator]]] = []
        groups = _KeyTable()
        for row in _drain(self._child):
            group_key = self._key(row)
            accumulators = groups.get(group_key)
            if accumulators is None:
                accumulators = [_Accumulator() for _ in self._aggregates]
                groups.setdefault(group_key, accumulators)
                ordered_groups.append((group_key, accumulators))
            for spec, acc in zip(self._aggregates, accumulators):
                acc.add(spec.func, spec.value(row) if spec.value else None)

        self._results = [
            Row(
                columns=list(self._columns),
                values=[
                    group_key,
                    *(
                        acc.result(spec.func)
                        for spec, acc in zip(self._aggregates, accumulators)
                    ),
                ],
            )
            for group_key, accumulators in ordered_groups
        ]
        self._current_idx = 0

    def next(self) -> Any:
        if self._current_idx >= len(self._results):
            return EXHAUSTED
        row = self._results[self._current_idx]
        self._current_idx += 1
        return row

    def close(self) -> None:
        self._child.close()
        self._results = []
        self._current_idx = 0


@dataclass(frozen=True)
class SortKey:
    """One ordering key of a sort."""

    key: Callable[[Any], Any]
    descending: bool = False


class SortOperator(Operator):
    """Stable multi-key sort.

    Keys are listed most significant first. They are applied least
    significant first, relying on the stability of list.sort, so rows
    equal on every key keep their input order and descending keys work
    for any orderable type.
    """

    def __init__(self, child: Operator, sort_keys: Sequence[SortKey]) -> None:
        self._child = child
        self._sort_keys = list(sort_keys)
        self._sorted_rows: list[Any] = []
        self._current_idx = 0

    def open(self) -> None:
        self._child.open()
        rows = _drain(self._child)
        for sort_key in reversed(self._sort_keys):
            rows.sort(key=sort_key.key, reverse=sort_key.descending)
        self._sorted_rows = rows
        self._current_idx = 0

    def next(self) -> Any:
        if self._current_idx >= len(self._sorted_rows):
            return EXHAUSTED
        row = self._sorted_rows[self._current_idx]
        self._current_idx += 1
        return row

    def close(self) -> None:
        self._child.close()
        self._sorted_rows = []
        self._current_idx = 0


class LimitOperator(Operator):
    """Limit operator that restricts row count."""

    def __init__(self, child: Operator, limit: int, offset: int = 0) -> None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        self._child = child
        self._limit = limit
        self._offset = offset
        self._returned = 0
        self._skipped = 0

    def open(self) -> None:
        self._child.open()
        self._returned = 0
        self._skipped = 0

    def next(self) -> Any:
        while self._skipped < self._offset:
            if self._child.next() is EXHAUSTED:
                self._skipped = self._offset
                self._returned = self._limit
                return EXHAUSTED
            self._skipped += 1

        if self._returned >= self._limit:
            return EXHAUSTED
        row = self._child.next()
        if row is EXHAUSTED:
            return EXHAUSTED
        self._returned += 1
        return row

    def close(self) -> None:
        self._child.close()


class DistinctOperator(Operator):
    """Keeps the first occurrence of every distinct value.

    Values are compared on ``key(row)`` when a key is given, otherwise
    on the row itself. Unhashable values such as Rows or lists are
    compared by equality.
    """

    def __init__(self, child: Operator, key: Callable[[Any], Hashable] | None = None) -> None:
        self._child = child
        self._key = key
        self._seen = _KeyTable()

    def open(self) -> None:
        self._child.open()
        self._seen = _KeyTable()

    def next(self) -> Any:
        while True:
            row = self._child.next()
            if row is EXHAUSTED:
                return EXHAUSTED
            marker = self._key(row) if self._key else row
            if marker not in self._seen:
                self._seen.setdefault(marker, True)
                return row

    def close(self) -> None:
        self._child.close()
        self._seen = _KeyTable()


# Eager API used by the analytical queries.


def filter_records(rows: Iterable[Any], predicate: Callable[[Any], bool]) -> list[Any]:
    """Return the rows satisfying ``predicate``, in input order."""
    return list(FilterOperator(ScanOperator(rows), predicate))


def project(rows: Iterable[Any], projection: Callable[[Any], Any]) -> list[Any]:
    """Map every row through ``projection``, in input order."""
    return list(ProjectOperator(ScanOperator(rows), projection))


def inner_join(
    left: Iterable[Any],
    right: Iterable[Any],
    left_key: Callable[[Any], Hashable],
    right_key: Callable[[Any], Hashable],
) -> list[tuple[Any, Any]]:
    """Equality inner join producing ``(left, right)`` pairs.

    Args:
        left: Probe side; drives the output order
        right: Build side
        left_key: Join key of a left row
        right_key: Join key of a right row

    Returns:
        One pair per matching (left, right) combination, ordered by left
        row and then by right row.
    """
    return list(
        HashJoinOperator(ScanOperator(left), ScanOperator(right), left_key, right_key)
    )


def group_aggregate(
    rows: Iterable[Any],
    key: Callable[[Any], Hashable],
    *aggregates: AggregateSpec,
) -> list[Row]:
    """Group rows by ``key`` and compute ``aggregates`` per group.

    Returns:
        One Row per distinct key, in first-appearance order, with columns
        ``key`` followed by each aggregate's name.
    """
    return list(GroupAggregateOperator(ScanOperator(rows), key, aggregates))


def sort_records(rows: Iterable[Any], *sort_keys: SortKey) -> list[Any]:
    """Stable sort by one or more keys, most significant first."""
    return list(SortOperator(ScanOperator(rows), sort_keys))


def top_k(rows: Iterable[Any], k: int, offset: int = 0) -> list[Any]:
    """Return the first ``k`` rows (after skipping ``offset``).

    Apply to an already sorted sequence; ties at the boundary are settled
    by the incoming order only.
    """
    return list(LimitOperator(ScanOperator(rows), k, offset))


def distinct(rows: Iterable[Any], key: Callable[[Any], Hashable] | None = None) -> list[Any]:
    """Drop repeated rows, keeping first occurrences in input order."""
    return list(DistinctOperator(ScanOperator(rows), key))
