"""Report output: aligned table or JSON."""

import json
from typing import Any

from podqos.core.report import ReportRow

HEADER = ["NAMESPACE", "POD NAME", "CONTAINER", "CPUl", "CPUr", "CLASS"]


def align_columns(lines: list[list[str]], padding: int = 2) -> str:
    """
    Align cells into columns.

    Every cell but the last on a line is padded with spaces to the widest
    cell of its column plus padding; last cells are left as-is.
    """
    widths: list[int] = []
    for cells in lines:
        for i, cell in enumerate(cells[:-1]):
            if i == len(widths):
                widths.append(0)
            widths[i] = max(widths[i], len(cell))

    out = []
    for cells in lines:
        if not cells:
            out.append("")
            continue
        padded = [cell.ljust(widths[i] + padding) for i, cell in enumerate(cells[:-1])]
        out.append("".join(padded) + cells[-1])
    return "\n".join(out)


class Output:
    """Collects report rows and renders them once."""

    def __init__(self):
        self.rows: list[ReportRow] = []
        self.namespace: str | None = None
        self.errors: list[str] = []
        self._printed: bool = False

    def emit(self, rows: list[ReportRow], namespace: str | None = None) -> None:
        """Store report rows and the namespace they were listed from."""
        self.rows.extend(rows)
        self.namespace = namespace

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    @property
    def summary(self) -> str:
        """One-line summary for logs."""
        if self.errors:
            return f"Error: {self.errors[0]}"
        return f"rows={len(self.rows)}"

    def to_plain(self) -> str:
        """Return rows as an aligned table with header."""
        return align_columns([HEADER] + [row.cells() for row in self.rows])

    def to_json(self) -> str:
        """Return rows as a JSON document."""
        data: dict[str, Any] = {
            "namespace": self.namespace or None,
            "rows": [row.to_dict() for row in self.rows],
        }
        return json.dumps(data, indent=2)

    def render(self, format: str = "plain") -> None:
        """Print output in the specified format."""
        if self._printed:
            return
        self._printed = True

        if format == "json":
            print(self.to_json())
        else:
            print(self.to_plain())
