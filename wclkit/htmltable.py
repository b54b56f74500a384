"""A simple table that renders to an HTML fragment."""

from __future__ import annotations

from dataclasses import dataclass, field


def _display_width(text: str) -> int:
    """Approximate display width: one per ASCII character, more for wider ones."""
    return (len(text.encode("utf-8")) + len(text)) // 2


@dataclass
class Table:
    """A titled table with a header row and data rows."""

    title: str = ""
    head: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    column_width: list[int] = field(default_factory=list)

    def add_row(self, row: list[str]) -> None:
        """Append a data row."""
        self.rows.append(row)

    def size(self) -> tuple[int, int]:
        """Return (number of rows including the header, widest row's column count)."""
        columns = max((len(row) for row in self.rows), default=0)
        return len(self.rows) + 1, max(len(self.head), columns)

    def compute_column_width(self) -> list[int]:
        """Store and return the widest cell width of each column."""
        widths = [_display_width(cell) for cell in self.head]
        for row in self.rows:
            for index, cell in enumerate(row):
                width = _display_width(cell)
                if index >= len(widths):
                    widths.append(width)
                elif width > widths[index]:
                    widths[index] = width
        self.column_width = widths
        return widths

    def to_html(self, notitle: bool = False) -> str:
        """Render the table; the title becomes a paragraph unless notitle is set."""
        parts: list[str] = []
        if not notitle and self.title:
            parts.append(f"<p>{self.title}</p>\n")
        parts.append("<table>\n")
        parts.append("<tr>" + "".join(f"<th>{cell}</th>" for cell in self.head) + "</tr>\n")
        for row in self.rows:
            parts.append("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>\n")
        parts.append("</table>\n")
        return "".join(parts)