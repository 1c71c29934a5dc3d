# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Table graphic organizer builder.

Building a table is a four step flow::

    template -> dimensions -> data -> result

Each transition takes a ``TableDraft`` and returns a new one; drafts are
frozen, so an earlier draft stays valid after the user moves on. ``back``
returns to the previous step and keeps everything entered so far.

The result is the JSON stored in ``graphic_organizers.content``:

    {
      "metadata": {"structure": {"rows", "columns", "headerCells", "answerCells"}},
      "data": {"raw": [[...]], "formatted": [{...}]}
    }
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Literal

MAX_ROWS = 50
MAX_COLUMNS = 20

CellType = Literal["normal", "header", "answer"]


class TableStep(str, Enum):
    TEMPLATE = "template"
    DIMENSIONS = "dimensions"
    DATA = "data"
    RESULT = "result"


_PREVIOUS_STEP = {
    TableStep.DIMENSIONS: TableStep.TEMPLATE,
    TableStep.DATA: TableStep.DIMENSIONS,
    TableStep.RESULT: TableStep.DATA,
}


class TableBuilderError(Exception):
    """Raised on an invalid transition or out-of-range input."""

    pass


@dataclass(frozen=True)
class CellPosition:
    row: int
    col: int

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "col": self.col}


@dataclass(frozen=True)
class TableDraft:
    """Immutable state of a table being built.

    Attributes:
        step: Current step.
        template_type: Chosen organizer template.
        rows: Number of rows.
        columns: Number of columns.
        cells: Cell text, ``rows`` tuples of ``columns`` strings.
        header_cells: Header cells in the order they were marked.
        answer_cells: Answer cells in the order they were marked.
        result: Generated content, set in the result step.
    """

    step: TableStep = TableStep.TEMPLATE
    template_type: str | None = None
    rows: int = 0
    columns: int = 0
    cells: tuple[tuple[str, ...], ...] = ()
    header_cells: tuple[CellPosition, ...] = ()
    answer_cells: tuple[CellPosition, ...] = ()
    result: dict[str, Any] | None = field(default=None, compare=False)

    def choose_template(self, template_type: str) -> "TableDraft":
        self._expect(TableStep.TEMPLATE)
        if not template_type or not template_type.strip():
            raise TableBuilderError("Please choose a graphic organizer template.")
        return replace(self, template_type=template_type.strip(), step=TableStep.DIMENSIONS)

    def set_dimensions(self, rows: int, columns: int) -> "TableDraft":
        """Size the grid and move to data entry.

        Cells inside the new bounds keep their text and type; new cells
        are empty and normal.
        """
        self._expect(TableStep.DIMENSIONS)
        if not 1 <= rows <= MAX_ROWS:
            raise TableBuilderError(f"Rows must be between 1 and {MAX_ROWS}")
        if not 1 <= columns <= MAX_COLUMNS:
            raise TableBuilderError(f"Columns must be between 1 and {MAX_COLUMNS}")

        cells = tuple(
            tuple(self._text(r, c) for c in range(columns))
            for r in range(rows)
        )

        def inside(position: CellPosition) -> bool:
            return position.row < rows and position.col < columns

        return replace(
            self,
            rows=rows,
            columns=columns,
            cells=cells,
            header_cells=tuple(p for p in self.header_cells if inside(p)),
            answer_cells=tuple(p for p in self.answer_cells if inside(p)),
            step=TableStep.DATA,
        )

    def set_cell(self, row: int, col: int, value: str) -> "TableDraft":
        self._expect(TableStep.DATA)
        self._check_position(row, col)
        cells = tuple(
            tuple(value if (r, c) == (row, col) else text for c, text in enumerate(line))
            for r, line in enumerate(self.cells)
        )
        return replace(self, cells=cells)

    def set_cell_type(self, row: int, col: int, cell_type: CellType) -> "TableDraft":
        """Mark a cell as header, answer or normal (unmarked)."""
        self._expect(TableStep.DATA)
        self._check_position(row, col)
        position = CellPosition(row, col)
        headers = tuple(p for p in self.header_cells if p != position)
        answers = tuple(p for p in self.answer_cells if p != position)

        if cell_type == "header":
            headers += (position,)
        elif cell_type == "answer":
            answers += (position,)
        elif cell_type != "normal":
            raise TableBuilderError(f"Unknown cell type: {cell_type}")
        return replace(self, header_cells=headers, answer_cells=answers)

    def cell_type(self, row: int, col: int) -> CellType:
        position = CellPosition(row, col)
        if position in self.header_cells:
            return "header"
        if position in self.answer_cells:
            return "answer"
        return "normal"

    def finish(self) -> "TableDraft":
        self._expect(TableStep.DATA)
        return replace(self, step=TableStep.RESULT, result=build_content(self))

    def back(self) -> "TableDraft":
        previous = _PREVIOUS_STEP.get(self.step)
        if previous is None:
            raise TableBuilderError("Already at the first step")
        return replace(self, step=previous, result=None)

    def _expect(self, step: TableStep) -> None:
        if self.step != step:
            raise TableBuilderError(f"Cannot do this in the {self.step.value} step")

    def _check_position(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            raise TableBuilderError(f"Cell ({row}, {col}) is outside the table")

    def _text(self, row: int, col: int) -> str:
        if row < len(self.cells) and col < len(self.cells[row]):
            return self.cells[row][col]
        return ""


def _header_key(draft: TableDraft, row: int, col: int) -> str:
    # A header in the same column wins over one in the same row
    key: str | None = None
    column_headers = [r for r in range(draft.rows) if r != row and draft.cell_type(r, col) == "header"]
    if column_headers:
        key = draft.cells[column_headers[0]][col]
    else:
        row_headers = [c for c in range(draft.columns) if c != col and draft.cell_type(row, c) == "header"]
        if row_headers:
            key = draft.cells[row][row_headers[0]]
    return key or f"Column {col + 1}"


def format_rows(draft: TableDraft) -> list[dict[str, Any]]:
    """One object per data row keyed by header text.

    Rows made only of header cells are skipped, as are header cells
    themselves. Answer cells become ``{"value": ..., "isAnswer": True}``.
    """
    formatted: list[dict[str, Any]] = []
    for row in range(draft.rows):
        types = [draft.cell_type(row, col) for col in range(draft.columns)]
        if all(cell_type == "header" for cell_type in types):
            continue

        item: dict[str, Any] = {}
        for col, cell_type in enumerate(types):
            if cell_type == "header":
                continue
            value = draft.cells[row][col]
            key = _header_key(draft, row, col)
            item[key] = {"value": value, "isAnswer": True} if cell_type == "answer" else value
        if item:
            formatted.append(item)
    return formatted


def build_content(draft: TableDraft) -> dict[str, Any]:
    return {
        "metadata": {
            "structure": {
                "rows": draft.rows,
                "columns": draft.columns,
                "headerCells": [p.to_dict() for p in draft.header_cells],
                "answerCells": [p.to_dict() for p in draft.answer_cells],
            }
        },
        "data": {
            "raw": [list(line) for line in draft.cells],
            "formatted": format_rows(draft),
        },
    }
