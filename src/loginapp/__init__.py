# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Minimal signup/login web app backed by MongoDB."""

__version__ = "0.1.0"
