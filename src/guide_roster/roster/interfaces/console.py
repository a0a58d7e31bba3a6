"""
Roster Console Interface
========================

Prints query tour results as "LABEL: value" lines.
"""

import sys
from typing import Any, Iterable, TextIO

from guide_roster.roster.domain import Guide, TourStep


def format_row(row: Any) -> str:
    """Render one result row; tuples come from projection queries."""
    if isinstance(row, tuple):
        return "(" + ", ".join(str(value) for value in row) + ")"
    return str(row)


def print_steps(steps: Iterable[TourStep], stream: TextIO | None = None) -> None:
    """
    Print every row of every step.

    Guides whose students were fetched list them indented beneath.
    """
    out = stream or sys.stdout
    for step in steps:
        for row in step.rows:
            print(f"{step.label}: {format_row(row)}", file=out)
            if isinstance(row, Guide) and row.students:
                for student in row.students:
                    print(f"    student: {student.name} ({student.enrollment_id})", file=out)
