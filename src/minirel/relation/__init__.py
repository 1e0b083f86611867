"""Relation library built on top of the minirel compute engine.

A relation is an ordered collection of rows, where each row
maps field names to values, like the records of a table.
It allows to explore the rows, combine them with other rows
and analyze them, the same way a relational database would,
but entirely in memory.

Relations provide a fluent API to perform operations such as
projection, filtering, joins, ordering, grouping and aggregation:

>>> from minirel import Relation
>>> employees = Relation([
...     {"id": 1, "dept": "A", "sal": 100},
...     {"id": 2, "dept": "B", "sal": 200},
...     {"id": 3, "dept": "A", "sal": 300},
... ])
>>> employees.order_by("sal", "desc").select(["id", "sal"]).to_list()
[{'id': 3, 'sal': 300}, {'id': 2, 'sal': 200}, {'id': 1, 'sal': 100}]
>>> employees.sum("sal"), employees.avg("sal")
(600, 200.0)
>>> print(employees.group_by("dept"))
id | dept | sal
-- | ---- | ---
1  | A    | 100
2  | B    | 200

The query operations never modify a relation,
they always return a new one.
"""

from .relation import Relation, to_plain

__all__ = ("Relation", "to_plain")
