"""Aggregations over the rows of a relation.

Frequently when analysing data is necessary
to compute statistics like the total or the average
of the values stored in a field.

The aggregations reduce all the rows they receive
to a single value. For example, given the following rows::

    city, shop, n_employees
    New York, Shop A, 10
    New York, Shop B, 15
    Los Angeles, Shop C, 8

We could compute the sum of the employees to get ``33``
or the average to get ``11.0``.

>>> rows = [{"n_employees": 10}, {"n_employees": 15}, {"n_employees": 8}]
>>> SumAggregation("n_employees").compute(rows)
33
>>> MeanAggregation("n_employees").compute(rows)
11.0
"""

import abc
from typing import Any, Iterable

from .base import Row

__all__ = (
    "Aggregation",
    "SumAggregation",
    "CountAggregation",
    "MeanAggregation",
)


class Aggregation(abc.ABC):
    """Base class for aggregations.

    Every aggregation is expected to implement
    a method that reduces the values of a field
    in all the provided rows to a single result.
    """

    def __init__(self, column: str | None = None) -> None:
        self.column = column

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.column})"

    __repr__ = __str__

    @abc.abstractmethod
    def compute(self, rows: Iterable[Row]) -> Any: ...


class SumAggregation(Aggregation):
    """Compute the sum of a field.

    Values are added with the ``+`` operator starting from ``0``,
    so the sum of no rows is ``0``. Values are not checked,
    adding values that are not numbers will fail
    the way Python fails when adding them.

    A row missing the field will lead to a ``KeyError``.
    """

    def compute(self, rows: Iterable[Row]) -> Any:
        return sum(row[self.column] for row in rows)


class CountAggregation(Aggregation):
    """Count the rows.

    The field is not accessed, each row is counted
    regardless of its content.
    """

    def compute(self, rows: Iterable[Row]) -> int:
        return sum(1 for _ in rows)


class MeanAggregation(Aggregation):
    """Compute the mean of a field.

    This is based on computing sum and count of the rows
    and then dividing the sum by the count.

    When the sum is zero (or any other false value) it is
    returned as it is without performing the division.
    That means that the mean of no rows is ``0``
    and that values cancelling each other lead to the
    integer ``0`` instead of ``0.0``.

    >>> MeanAggregation("v").compute([])
    0
    >>> MeanAggregation("v").compute([{"v": -1}, {"v": 1}])
    0
    """

    def compute(self, rows: Iterable[Row]) -> Any:
        rows = list(rows)
        total = SumAggregation(self.column).compute(rows)
        if not total:
            return total
        return total / CountAggregation().compute(rows)
