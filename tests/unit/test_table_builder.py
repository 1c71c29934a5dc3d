# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the table graphic organizer builder."""

import pytest

from src.domains.graphic_organizer.service import build_table
from src.domains.graphic_organizer.table_builder import (
    MAX_COLUMNS,
    MAX_ROWS,
    CellPosition,
    TableBuilderError,
    TableDraft,
    TableStep,
)
from src.models.graphic_organizer import TableBuildRequest


def _cause_effect() -> TableDraft:
    draft = TableDraft().choose_template("table").set_dimensions(3, 2)
    for (row, col), text in {
        (0, 0): "Cause",
        (0, 1): "Effect",
        (1, 0): "Rain",
        (1, 1): "Flood",
        (2, 0): "Drought",
        (2, 1): "Famine",
    }.items():
        draft = draft.set_cell(row, col, text)
    draft = draft.set_cell_type(0, 0, "header").set_cell_type(0, 1, "header")
    return draft.set_cell_type(2, 1, "answer")


class TestTableDraft:
    def test_steps_advance_in_order(self) -> None:
        draft = TableDraft()
        assert draft.step == TableStep.TEMPLATE

        draft = draft.choose_template(" table ")
        assert draft.step == TableStep.DIMENSIONS
        assert draft.template_type == "table"

        draft = draft.set_dimensions(2, 3)
        assert draft.step == TableStep.DATA
        assert draft.cells == (("", "", ""), ("", "", ""))

        assert draft.finish().step == TableStep.RESULT

    def test_out_of_order_transition_is_refused(self) -> None:
        with pytest.raises(TableBuilderError, match="template step"):
            TableDraft().set_dimensions(2, 2)

    def test_template_is_required(self) -> None:
        with pytest.raises(TableBuilderError):
            TableDraft().choose_template("  ")

    @pytest.mark.parametrize(
        ("rows", "columns"),
        [(0, 2), (MAX_ROWS + 1, 2), (2, 0), (2, MAX_COLUMNS + 1)],
    )
    def test_dimension_bounds(self, rows: int, columns: int) -> None:
        draft = TableDraft().choose_template("table")

        with pytest.raises(TableBuilderError):
            draft.set_dimensions(rows, columns)

    def test_largest_table_is_allowed(self) -> None:
        draft = TableDraft().choose_template("table").set_dimensions(MAX_ROWS, MAX_COLUMNS)

        assert len(draft.cells) == MAX_ROWS
        assert len(draft.cells[0]) == MAX_COLUMNS

    def test_cell_outside_table(self) -> None:
        draft = TableDraft().choose_template("table").set_dimensions(2, 2)

        with pytest.raises(TableBuilderError, match="outside"):
            draft.set_cell(2, 0, "x")

    def test_drafts_are_immutable(self) -> None:
        draft = TableDraft().choose_template("table").set_dimensions(1, 1)

        changed = draft.set_cell(0, 0, "x")

        assert draft.cells == (("",),)
        assert changed.cells == (("x",),)

    def test_cell_type_is_exclusive(self) -> None:
        draft = TableDraft().choose_template("table").set_dimensions(1, 1)

        draft = draft.set_cell_type(0, 0, "header").set_cell_type(0, 0, "answer")
        assert draft.cell_type(0, 0) == "answer"
        assert draft.header_cells == ()

        draft = draft.set_cell_type(0, 0, "normal")
        assert draft.cell_type(0, 0) == "normal"

    def test_back_keeps_entered_data(self) -> None:
        draft = _cause_effect().finish()

        draft = draft.back()
        assert draft.step == TableStep.DATA
        assert draft.result is None

        draft = draft.back()
        assert draft.step == TableStep.DIMENSIONS

        shrunk = draft.set_dimensions(2, 1)
        assert shrunk.cells == (("Cause",), ("Rain",))
        assert shrunk.header_cells == (CellPosition(0, 0),)
        assert shrunk.answer_cells == ()

    def test_back_from_first_step(self) -> None:
        with pytest.raises(TableBuilderError):
            TableDraft().back()


class TestTableContent:
    def test_result_structure(self) -> None:
        content = _cause_effect().finish().result

        assert content["metadata"]["structure"] == {
            "rows": 3,
            "columns": 2,
            "headerCells": [{"row": 0, "col": 0}, {"row": 0, "col": 1}],
            "answerCells": [{"row": 2, "col": 1}],
        }
        assert content["data"]["raw"] == [
            ["Cause", "Effect"],
            ["Rain", "Flood"],
            ["Drought", "Famine"],
        ]

    def test_formatted_rows_use_column_headers(self) -> None:
        content = _cause_effect().finish().result

        assert content["data"]["formatted"] == [
            {"Cause": "Rain", "Effect": "Flood"},
            {"Cause": "Drought", "Effect": {"value": "Famine", "isAnswer": True}},
        ]

    def test_row_headers_and_default_keys(self) -> None:
        draft = TableDraft().choose_template("table").set_dimensions(2, 2)
        draft = draft.set_cell(0, 0, "Name").set_cell(0, 1, "Bart").set_cell(1, 1, "Lisa")
        draft = draft.set_cell_type(0, 0, "header")

        formatted = draft.finish().result["data"]["formatted"]

        assert formatted == [{"Name": "Bart"}, {"Name": "", "Column 2": "Lisa"}]


class TestBuildTable:
    def test_builds_from_request(self) -> None:
        response = build_table(
            TableBuildRequest(
                rows=2,
                columns=2,
                cells=[["Term", "Meaning"], ["Delta"]],
                header_cells=[{"row": 0, "col": 0}, {"row": 0, "col": 1}],
                answer_cells=[{"row": 1, "col": 1}],
            )
        )

        assert response.template_type == "table"
        assert response.content["data"]["raw"] == [["Term", "Meaning"], ["Delta", ""]]
        assert response.content["data"]["formatted"] == [
            {"Term": "Delta", "Meaning": {"value": "", "isAnswer": True}}
        ]

    def test_invalid_request(self) -> None:
        with pytest.raises(TableBuilderError):
            build_table(TableBuildRequest(rows=2, columns=2, cells=[["a", "b", "c"]]))
