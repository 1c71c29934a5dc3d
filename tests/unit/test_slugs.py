# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for curriculum URL slugs."""

import pytest

from src.domains.curriculum.slugs import slugify


class TestSlugify:
    @pytest.mark.parametrize(
        ("name", "slug"),
        [
            ("  World  History ", "world-history"),
            ("Grade 5 Math", "grade-5-math"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_slugify(self, name: str | None, slug: str) -> None:
        assert slugify(name) == slug
