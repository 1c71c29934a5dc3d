# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Graphic organizer table models."""

from typing import Any

from pydantic import BaseModel, Field


class CellPositionModel(BaseModel):
    row: int = Field(ge=0)
    col: int = Field(ge=0)


class TableBuildRequest(BaseModel):
    """A whole table in one request.

    Attributes:
        cells: Cell text by row; missing rows or cells are empty.
        header_cells: Cells marked as headers.
        answer_cells: Cells marked as answers.
    """

    template_type: str = "table"
    rows: int
    columns: int
    cells: list[list[str]] = Field(default_factory=list)
    header_cells: list[CellPositionModel] = Field(default_factory=list)
    answer_cells: list[CellPositionModel] = Field(default_factory=list)


class TableBuildResponse(BaseModel):
    template_type: str
    content: dict[str, Any]
