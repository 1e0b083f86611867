import logging

import pyarrow as pa

from minirel import Relation

logging.basicConfig(level=logging.DEBUG)

employees = Relation(
    pa.table(
        {
            "id": [1, 2, 3, 4],
            "dept": ["A", "B", "A", "C"],
            "sal": [100, 200, 300, 150],
        }
    )
)
departments = [
    {"dept": "A", "dept_name": "Engineering"},
    {"dept": "B", "dept_name": "Sales"},
]

report = (
    employees.where(lambda row, idx: row["sal"] >= 150)
    .left_join(departments, lambda emp, dept: emp["dept"] == dept["dept"])
    .order_by(["dept", "sal"], ["asc", "desc"])
)
print(report)
print("---")
print(employees.group_by("dept"))
print("---")
print("total:", employees.sum("sal"), "average:", employees.avg("sal"))
print(report.to_arrow())
