"""Query plan nodes that implement join operations.

The join operations are implemented as nested loops:
for each row of the left side the rows of the right side
are scanned in order until one of them satisfies the
join predicate. The first matching row wins, so each
left row is joined to at most one right row.

When the left and right rows share some fields,
the values of the right row take precedence in the joined row.

An alternative implementation would be to use a hash join algorithm
that builds a hash table from one of the sides and then probes the
other side to find matching rows. That requires the join condition
to be an equality of keys, while here the join condition can be
any predicate, so every pair of rows might need to be evaluated.

Inner Join
==========

Provided by :class:`InnerJoinNode`, only the left rows that
found a match are emitted:

>>> from minirel.compute import RowsDataSource
>>> left = RowsDataSource([{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}, {"id": 3, "name": "Charlie"}])
>>> right = RowsDataSource([{"id": 3, "age": 25}, {"id": 2, "age": 30}])
>>> same_id = lambda l, r: l["id"] == r["id"]
>>> list(InnerJoinNode(same_id, left, right).rows())
[{'id': 2, 'name': 'Bob', 'age': 30}, {'id': 3, 'name': 'Charlie', 'age': 25}]

Left Join
=========

Provided by :class:`LeftJoinNode`, all left rows are emitted,
those without a match get the right fields set to ``None``:

>>> list(LeftJoinNode(same_id, left, right).rows())
[{'id': 1, 'name': 'Alice', 'age': None}, {'id': 2, 'name': 'Bob', 'age': 30}, {'id': 3, 'name': 'Charlie', 'age': 25}]

Right Join
==========

Provided by :class:`RightJoinNode`, it's a left join where
the two sides swapped their role:

>>> list(RightJoinNode(same_id, left, right).rows())
[{'id': 3, 'age': 25, 'name': 'Charlie'}, {'id': 2, 'age': 30, 'name': 'Bob'}]
"""

import logging
from typing import Any, Callable

from .. import utils
from .base import QueryPlanNode, Row, RowsGenerator

log = logging.getLogger(__name__)

JoinCondition = Callable[[Row, Row], Any]


class InnerJoinNode(QueryPlanNode):
    """Join two sources of rows using an inner join.

    Supposing we have two sides::

        left:
        +----+---------+
        | id | name    |
        +----+---------+
        | 1  | Alice   |
        | 2  | Bob     |
        | 3  | Charlie |
        +----+---------+

        right:
        +----+-----+
        | id | age |
        +----+-----+
        | 3  | 25  |
        | 2  | 30  |
        | 2  | 99  |
        +----+-----+

    And the condition ``left["id"] == right["id"]``,
    we would perform the following steps for each left row:

    1. Scan the right rows in order, evaluating the condition.
       For ``Bob`` the scan stops at the second right row,
       the third one is never considered even though it matches too.

    2. Merge the left row with the matching right row
       into a new row, the right values override the left ones::

        +----+---------+-----+
        | id | name    | age |
        +----+---------+-----+
        | 2  | Bob     | 30  |
        +----+---------+-----+

    3. If no right row matched, like for ``Alice``,
       nothing is emitted for the left row.

    The order of the result is the order of the left rows.
    """

    def __init__(
        self,
        on: JoinCondition,
        left_child: QueryPlanNode,
        right_child: QueryPlanNode,
    ) -> None:
        """
        :param on: Function accepting ``(left_row, right_row)``, true when they match.
        :param left_child: The left source of rows to join.
        :param right_child: The right source of rows to join.
        """
        self.on = on
        self.left_child = left_child
        self.right_child = right_child

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}(on={utils.inspect.get_qualname(self.on)}, "
            f"left={self.left_child}, right={self.right_child})"
        )

    def find_match(self, left_row: Row, right_rows: list[Row]) -> Row | None:
        """Return the first right row matching the left row, if any."""
        for right_row in right_rows:
            if self.on(left_row, right_row):
                return right_row
        return None

    def rows(self) -> RowsGenerator:
        """Perform the inner join operation.

        Accumulates all rows of the right child,
        as they have to be scanned again for each left row.
        """
        right_rows = list(self.right_child.rows())
        matched = unmatched = 0
        for left_row in self.left_child.rows():
            right_row = self.find_match(left_row, right_rows)
            if right_row is None:
                unmatched += 1
                continue
            matched += 1
            yield {**left_row, **right_row}
        log.debug("%s matched %d rows, %d unmatched", self.__class__.__name__, matched, unmatched)


class LeftJoinNode(InnerJoinNode):
    """Join two sources of rows using a left join.

    Behaves like :class:`InnerJoinNode` but the left rows
    that had no match are emitted too, padded with a *null row*:
    a row with the fields of the first right row, all set to ``None``.
    Padding only adds the fields the left row doesn't have,
    so the fields shared by the two sides, like the join keys,
    keep their left value.

    If the right side has no rows, the null row has no fields
    and the unmatched left rows are emitted as they are.

    Every left row leads to exactly one joined row.
    """

    def null_row(self, right_rows: list[Row]) -> Row:
        """Build the row used to pad left rows that had no match."""
        if not right_rows:
            return {}
        return dict.fromkeys(right_rows[0])

    def pad(self, left_row: Row, null_row: Row) -> Row:
        """Add the fields of the null row that the left row doesn't have."""
        row = dict(left_row)
        for key in null_row:
            row.setdefault(key, None)
        return row

    def rows(self) -> RowsGenerator:
        """Perform the left join operation.

        Accumulates all rows of the right child,
        as they have to be scanned again for each left row.
        """
        right_rows = list(self.right_child.rows())
        null_row = self.null_row(right_rows)
        matched = unmatched = 0
        for left_row in self.left_child.rows():
            right_row = self.find_match(left_row, right_rows)
            if right_row is None:
                unmatched += 1
                yield self.pad(left_row, null_row)
            else:
                matched += 1
                yield {**left_row, **right_row}
        log.debug("%s matched %d rows, %d unmatched", self.__class__.__name__, matched, unmatched)


class RightJoinNode(LeftJoinNode):
    """Join two sources of rows using a right join.

    A right join is a :class:`LeftJoinNode` where the
    right child acts as the left side and the other way around.
    So every row of the right child leads to exactly
    one joined row, and the join condition receives the
    right rows as its first argument.
    """

    def __init__(
        self,
        on: JoinCondition,
        left_child: QueryPlanNode,
        right_child: QueryPlanNode,
    ) -> None:
        """
        :param on: Function accepting ``(right_row, left_row)``, true when they match.
        :param left_child: The source of rows that will be used as the right side.
        :param right_child: The source of rows that will be used as the left side.
        """
        super().__init__(on, left_child=right_child, right_child=left_child)
