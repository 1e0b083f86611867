"""Query plan nodes that perform sorting of rows.

When computing ranks or looking for most significant
values, it's often necessary to sort the rows based
on one or more fields.

This module implements the sorting capabilities.
"""

import datetime
from decimal import Decimal
from numbers import Real
from typing import Any, Self

from .base import QueryPlanNode, Row, RowsGenerator

ASCENDING = "asc"
DESCENDING = "desc"


def parse_directions(keys: list[str], directions: str | list[str]) -> list[bool]:
    """Convert sort directions to the descending flag of each key.

    A single direction applies to all keys, while a list
    provides the direction of each key in order. When the list
    is shorter than the keys, the remaining keys are sorted ascending.

    >>> parse_directions(["a", "b"], "desc")
    [True, True]
    >>> parse_directions(["a", "b", "c"], ["desc", "ASC"])
    [True, False, False]

    :param keys: The keys that will be sorted.
    :param directions: ``"asc"`` or ``"desc"``, or a list of them.
    """
    if isinstance(directions, str):
        directions = [directions] * len(keys)
    else:
        directions = list(directions)
        directions += [ASCENDING] * (len(keys) - len(directions))

    descending = []
    for direction in directions[: len(keys)]:
        if not isinstance(direction, str) or direction.lower() not in (
            ASCENDING,
            DESCENDING,
        ):
            raise ValueError(
                f"Invalid sort direction {direction!r}, expected {ASCENDING!r} or {DESCENDING!r}"
            )
        descending.append(direction.lower() == DESCENDING)
    return descending


# Types whose values of the same type are always comparable to each other.
NATURALLY_ORDERED = (str, bytes, datetime.date, datetime.time, datetime.timedelta)


def sort_value(value: Any) -> tuple:
    """Convert a value to a tuple that sorts in a total order.

    Values of any type can appear in the same field,
    so they are first divided in classes that sort in this order:

    1. ``None``
    2. Numbers (``bool``, ``int``, ``float``, ``Decimal``, ...), compared numerically.
    3. NaN, all NaN values are equal to each other.
    4. Any other value, grouped by type and sorted by type name.
       Strings, bytes and dates are compared naturally,
       tuples and lists element by element,
       every other type by its repr.

    >>> sorted([3, None, "b", 1.5, float("nan"), "a", 2], key=sort_value)
    [None, 1.5, 2, 3, nan, 'a', 'b']
    >>> sort_value(1) == sort_value(1.0)
    True
    """
    if value is None:
        return (0,)
    if isinstance(value, (Real, Decimal)):
        if value != value:  # NaN
            return (2,)
        return (1, value)

    value_type = type(value)
    type_name = f"{value_type.__module__}.{value_type.__qualname__}"
    if isinstance(value, NATURALLY_ORDERED):
        # Naive and timezone aware values can't be compared with each other.
        aware = getattr(value, "tzinfo", None) is not None
        return (3, type_name, aware, value)
    if isinstance(value, (tuple, list)):
        return (3, type_name, tuple(sort_value(item) for item in value))
    return (3, type_name, repr(value))


class SortKey:
    """Makes rows sortable by Python functions.

    This implements the rich comparison methods to allow
    sorting of rows based on the values of the
    fields in the order they are provided.
    """

    __slots__ = ("values", "descending_orders")

    def __init__(self, row: Row, keys: list[str], descending_orders: list[bool]) -> None:
        """
        :param row: The row to compare.
        :param keys: The fields to use for comparison.
        :param descending_orders: Which of the values are compared for descending order
        """
        self.descending_orders = descending_orders
        self.values = [sort_value(row[key]) for key in keys]

    def __lt__(self, other: Self) -> bool:
        for v1, v2, desc in zip(self.values, other.values, self.descending_orders):
            if v1 == v2:
                continue
            if desc:
                return v1 > v2
            return v1 < v2
        return False  # All keys are equal


class SortNode(QueryPlanNode):
    """Sort rows in-memory based on one or more fields.

    The node expects a list of fields and a list of
    sort directions. The rows will be sorted based on
    the fields in the order they are provided,
    the second field is only used when rows have the same
    value for the first one, and so on.

    The sort directions are used to specify if the
    sorting should be ascending or descending.

    The sort is stable: rows that have the same values
    for all the fields keep the order they had.

    >>> from minirel.compute import RowsDataSource
    >>> data = RowsDataSource([{"id": 1, "v": 1}, {"id": 2, "v": 3}, {"id": 3, "v": 1}])
    >>> # Sort the rows in descending order
    >>> [row["id"] for row in SortNode(["v"], [True], data).rows()]
    [2, 1, 3]
    """

    def __init__(
        self, keys: list[str], descending: list[bool], child: QueryPlanNode
    ) -> None:
        """
        :param keys: The fields to sort by in the order they should be sorted.
        :param descending: If each field should be sorted in a descending order.
        :param child: The node emitting the rows to be sorted.
        """
        if len(keys) != len(descending):
            raise ValueError("Keys and descending must have the same length")

        self.keys = keys
        self.descending = descending
        self.child = child

    def __str__(self) -> str:
        sorting = [
            (key, DESCENDING if desc else ASCENDING)
            for key, desc in zip(self.keys, self.descending)
        ]
        return f"SortNode(sorting={sorting}, {self.child})"

    def rows(self) -> RowsGenerator:
        """Sort the rows of the child node.

        Rows provided by child node are accumulated
        until they are all loaded in memory, then they
        are sorted at once.

        A row missing one of the sorting fields will
        lead to a ``KeyError``.
        """
        yield from sorted(
            self.child.rows(),
            key=lambda row: SortKey(row, self.keys, self.descending),
        )
