# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations


class LoginAppError(Exception):
    """Base error for unexpected failures in the auth flow."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class HashFormatError(LoginAppError):
    """A stored password hash could not be decoded."""


class PersistenceError(LoginAppError):
    """The account store is unreachable or rejected a write."""


class HasherError(LoginAppError):
    """The hash backend failed for a reason other than a malformed hash."""
