# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Graphic organizer helpers exposed over the API."""

import logging

from src.domains.graphic_organizer.table_builder import TableBuilderError, TableDraft
from src.models.graphic_organizer import TableBuildRequest, TableBuildResponse

logger = logging.getLogger(__name__)


def build_table(request: TableBuildRequest) -> TableBuildResponse:
    """Run the table builder over a complete request.

    Raises:
        TableBuilderError: If dimensions or cell positions are invalid.
    """
    draft = TableDraft().choose_template(request.template_type)
    draft = draft.set_dimensions(request.rows, request.columns)

    for row, line in enumerate(request.cells):
        for col, value in enumerate(line):
            if value:
                draft = draft.set_cell(row, col, value)
    for position in request.header_cells:
        draft = draft.set_cell_type(position.row, position.col, "header")
    for position in request.answer_cells:
        draft = draft.set_cell_type(position.row, position.col, "answer")

    draft = draft.finish()
    if draft.result is None:
        raise TableBuilderError("Table could not be generated")

    logger.debug(
        "Built %dx%d table with %d header and %d answer cells",
        draft.rows,
        draft.columns,
        len(draft.header_cells),
        len(draft.answer_cells),
    )
    return TableBuildResponse(template_type=draft.template_type or "table", content=draft.result)
