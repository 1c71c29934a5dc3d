# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Graphic organizer domain package."""

from src.domains.graphic_organizer.service import build_table
from src.domains.graphic_organizer.table_builder import (
    CellPosition,
    TableBuilderError,
    TableDraft,
    TableStep,
)

__all__ = [
    "build_table",
    "CellPosition",
    "TableBuilderError",
    "TableDraft",
    "TableStep",
]
