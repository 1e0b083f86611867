"""Format rows into a text table for print.

the `tabulate` function takes a list of rows and formats it into a text table.
It will truncate long strings, format floats to 2 decimal places, and limit the number of rows to display.
The function is used to display the content of a :class:`minirel.Relation`.

Example:

    >>> rows = [
    ...     {"Product": "Videogame", "Quantity": 8, "Price": 66.5},
    ...     {"Product": "Laptop", "Quantity": 8, "Price": 38.72},
    ...     {"Product": "Laptop", "Quantity": 7, "Price": 77.46},
    ... ]
    >>> print(tabulate(rows))
    Product   | Quantity | Price
    --------- | -------- | -----
    Videogame | 8        | 66.50
    Laptop    | 8        | 38.72
    Laptop    | 7        | 77.46
"""

from typing import Any, Sequence

DEFAULT_MAX_ROWS = 20


def tabulate(rows: Sequence[dict[str, Any]], max_rows: int = DEFAULT_MAX_ROWS) -> str:
    """Format a list of rows into a text table.

    As rows are not required to share the same fields,
    the header is made of all the fields that appear
    in the displayed rows, in order of first appearance.
    Fields missing from a row are left blank.

    Will produce a string like::

        Product   | Quantity | Price | Total
        --------- | -------- | ----- | ------
        Videogame | 8        | 66.50 | 532.00
        Laptop    | 8        | 38.72 | 309.76
    """
    shown = rows[:max_rows]
    cols = collect_columns(shown)
    textrows = [
        [format_value(row[c]) if c in row else "" for c in cols] for row in shown
    ]

    colsizes = compute_max_colsize(cols, textrows)
    header = [maketablerow(cols, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    body = [maketablerow(row, colsizes=colsizes) for row in textrows]

    table = "\n".join(header + separator + body)
    if len(rows) > max_rows:
        table += f"\n... and {len(rows) - max_rows} more rows"
    return table


def collect_columns(rows: Sequence[dict[str, Any]]) -> list[str]:
    """Collect the union of the field names of the rows preserving their order."""
    # dict is used as an ordered set.
    cols: dict[str, None] = {}
    for row in rows:
        cols.update(dict.fromkeys(row))
    return list(cols)


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    )


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    This function will format floats to 2 decimal places,
    and truncate long strings.
    """
    if isinstance(v, float):
        return f"{v:.2f}"
    elif isinstance(v, bool):
        return "true" if v else "false"
    elif v is None:
        return "null"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
