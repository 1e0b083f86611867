"""Query plan nodes that group rows.

Grouping keeps one row for each distinct combination
of values of the grouping fields. Which is the same
as a ``SELECT DISTINCT ON (...)`` in some SQL dialects.

Given the following rows::

    id, dept, salary
    1,  A,    100
    2,  B,    200
    3,  A,    300

Grouping by ``dept`` would lead to::

    id, dept, salary
    1,  A,    100
    2,  B,    200

As the first row of each group is the one that is kept.
"""

from .base import QueryPlanNode, Row, RowsGenerator, as_keys

SIGNATURE_SEPARATOR = ","


def group_signature(row: Row, keys: list[str]) -> str:
    """Compute the signature identifying the group of a row.

    The signature is made of the values of the grouping
    fields converted to text and joined by a comma,
    so values that look the same once converted to text,
    like ``1`` and ``"1"``, belong to the same group.

    >>> group_signature({"dept": "A", "floor": 3, "id": 1}, ["floor", "dept"])
    '3,A'
    """
    return SIGNATURE_SEPARATOR.join(str(row[key]) for key in keys)


class GroupNode(QueryPlanNode):
    """Group rows keeping the first row of each group.

    The groups are emitted in the order in which they
    were first seen.

    >>> from minirel.compute import RowsDataSource
    >>> data = RowsDataSource([
    ...     {"id": 1, "dept": "A"}, {"id": 2, "dept": "B"}, {"id": 3, "dept": "A"}
    ... ])
    >>> list(GroupNode("dept", data).rows())
    [{'id': 1, 'dept': 'A'}, {'id': 2, 'dept': 'B'}]
    """

    def __init__(self, keys: str | list[str], child: QueryPlanNode) -> None:
        """
        :param keys: The field or fields to group by.
        :param child: The child node that will provide the rows to group.
        """
        self.keys = as_keys(keys)
        self.child = child

    def __str__(self) -> str:
        return f"GroupNode(keys={self.keys}, {self.child})"

    def rows(self) -> RowsGenerator:
        """Emit the first row of each group.

        Rows are emitted as soon as a new group is found,
        only the signatures of the groups already seen
        are kept in memory.

        A row missing one of the grouping fields will
        lead to a ``KeyError``.
        """
        seen: set[str] = set()
        for row in self.child.rows():
            signature = group_signature(row, self.keys)
            if signature in seen:
                continue
            seen.add(signature)
            yield row
