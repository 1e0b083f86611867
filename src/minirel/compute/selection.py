"""Query plan nodes that implement projection of fields.

A common request in queries is to select specific fields
of the rows. An example is the ``SELECT`` clause in SQL queries.

This module implements the basic projection capabilities.
"""

from .base import QueryPlanNode, RowsGenerator, as_keys


class ProjectNode(QueryPlanNode):
    """Project rows by selecting specific fields.

    The projection expects a list of field names to keep,
    every other field is discarded. The fields keep
    the order they had in the row, not the order they
    were requested in, and requested fields that are
    missing from a row are silently ignored.

    >>> from minirel.compute import RowsDataSource
    >>> data = RowsDataSource([{"a": 1, "b": 4, "c": 7}, {"a": 2, "c": 8}])
    >>> list(ProjectNode(["c", "a", "b"], data).rows())
    [{'a': 1, 'b': 4, 'c': 7}, {'a': 2, 'c': 8}]
    >>> list(ProjectNode("b", data).rows())
    [{'b': 4}, {}]
    """

    def __init__(self, select: str | list[str], child: QueryPlanNode) -> None:
        """
        :param select: The field name or list of field names to keep.
        :param child: The node emitting the rows to be projected.
        """
        self.select = as_keys(select)
        self.child = child

    def __str__(self) -> str:
        return f"ProjectNode(select={self.select}, child={self.child})"

    def rows(self) -> RowsGenerator:
        """Apply the projection to the child node.

        For each row yielded by the child node,
        build a new row with only the selected fields.
        The original rows are never modified.
        """
        keep = set(self.select)
        for row in self.child.rows():
            yield {k: v for k, v in row.items() if k in keep}
