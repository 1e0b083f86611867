"""minirel

A minimal relational algebra engine working on in-memory rows.

minirel stores rows, plain Python dictionaries, in a :class:`Relation`
and provides projection, filtering, joins, ordering, grouping and
aggregation over them. Nothing is persisted and everything happens in memory.

The library is constituted by multiple components, each isolated within its own
package and each self documented in literate programming style.

The primary components are:

* The Compute Engine, in charge of executing each operation on the rows.
* The Relation API, which provides an high level API for the compute engine.

For the user guide and code documentation of each component, refer to the
component itself.
"""

from . import compute
from .relation import Relation

__all__ = ("compute", "Relation")
