"""Curriculum Studio Backend.

Curriculum authoring service: lessons and their activities, lesson plans,
graphic organizers and invitation-code registration for districts and
schools.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
