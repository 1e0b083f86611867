"""The minirel Compute Engine

The compute engine defines the nodes in charge of
each operation that can be performed on rows.

Rows are plain Python dictionaries, mapping field
names to values, and every node consumes the rows
emitted by its child node and emits new rows.

This allows to easily build compute pipelines like::

    (rows)-->Node1--(rows)-->Node2--(rows)-->...

The nodes themselves are in charge of their execution,
this keeps the behavior near to the node and thus makes easy to
know how a Node is actually executed without having to look around too much.

Building a pipeline requires to combine the nodes that we want
to be executed starting with one or more ``DataSource`` nodes as the
leaf nodes:

>>> from minirel.compute import FilterNode, SortNode, RowsDataSource
>>> data = [
...    {"animal": "Flamingo", "n_legs": 2},
...    {"animal": "Horse", "n_legs": 4},
...    {"animal": "Brittle stars", "n_legs": 5},
...    {"animal": "Centipede", "n_legs": 100},
... ]
>>> # SELECT * FROM data WHERE n_legs >= 5 ORDER BY n_legs DESC
>>> query = SortNode(["n_legs"], [True], FilterNode(
...     lambda row, idx: row["n_legs"] >= 5,
...     RowsDataSource(data)
... ))
>>> for row in query.rows():
...     print(row)
{'animal': 'Centipede', 'n_legs': 100}
{'animal': 'Brittle stars', 'n_legs': 5}

Most users will not need to build nodes themselves,
:class:`minirel.Relation` provides an higher level API
that builds and executes them.
"""

from .aggregate import CountAggregation, MeanAggregation, SumAggregation
from .base import QueryPlanNode, Row
from .datasources import (
    IterableDataSource,
    PyArrowTableDataSource,
    RelationDataSource,
    RowsDataSource,
    datasource_for,
)
from .filtering import FilterNode
from .grouping import GroupNode
from .join import InnerJoinNode, LeftJoinNode, RightJoinNode
from .selection import ProjectNode
from .sorting import SortNode

__all__ = (
    "QueryPlanNode",
    "Row",
    "RowsDataSource",
    "IterableDataSource",
    "RelationDataSource",
    "PyArrowTableDataSource",
    "datasource_for",
    "FilterNode",
    "ProjectNode",
    "SortNode",
    "GroupNode",
    "InnerJoinNode",
    "LeftJoinNode",
    "RightJoinNode",
    "CountAggregation",
    "MeanAggregation",
    "SumAggregation",
)
