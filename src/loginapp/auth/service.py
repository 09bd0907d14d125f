# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Signup and login flows.

The service holds no state between calls. Each flow returns an outcome object
instead of raising for expected results:

- ``signup`` -> :class:`SignupSucceeded` | :class:`SignupFailed`
- ``login``  -> :class:`LoginSucceeded`  | :class:`LoginFailed`

``login`` lets :class:`~loginapp.errors.HashFormatError` and
:class:`~loginapp.errors.PersistenceError` propagate; the caller turns them
into a server error.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Union

from loginapp.auth.passwords import PasswordHasher
from loginapp.infra.account_repo import Account, AccountRepository

logger = logging.getLogger(__name__)


class FailureReason(str, enum.Enum):
    NOT_FOUND = "not_found"
    BAD_CREDENTIAL = "bad_credential"


@dataclass(frozen=True)
class SignupSucceeded:
    account: Account


@dataclass(frozen=True)
class SignupFailed:
    reason: Exception


@dataclass(frozen=True)
class LoginSucceeded:
    account: Account


@dataclass(frozen=True)
class LoginFailed:
    reason: FailureReason


SignupOutcome = Union[SignupSucceeded, SignupFailed]
LoginOutcome = Union[LoginSucceeded, LoginFailed]


class AuthService:
    def __init__(self, store: AccountRepository, hasher: PasswordHasher):
        self.store = store
        self.hasher = hasher

    def signup(self, username: Optional[str], password: Optional[str], email: Optional[str]) -> SignupOutcome:
        # No duplicate check: same email may sign up any number of times
        try:
            password_hash = self.hasher.hash(password)
            account = self.store.create(username, password_hash, email)
        except Exception as e:
            logger.exception("Signup failed")
            return SignupFailed(reason=e)
        logger.info("Signup ok (account %s)", account.id)
        return SignupSucceeded(account=account)

    def login(self, email: Optional[str], password: Optional[str]) -> LoginOutcome:
        if not email or password is None:
            logger.info("Login rejected: missing credentials")
            return LoginFailed(reason=FailureReason.NOT_FOUND)

        account = self.store.find_by_email(email)
        if account is None:
            logger.info("Login failed: %s", FailureReason.NOT_FOUND.value)
            return LoginFailed(reason=FailureReason.NOT_FOUND)

        if not self.hasher.verify(password, account.password_hash):
            logger.info("Login failed: %s (account %s)", FailureReason.BAD_CREDENTIAL.value, account.id)
            return LoginFailed(reason=FailureReason.BAD_CREDENTIAL)

        logger.info("Login ok (account %s)", account.id)
        return LoginSucceeded(account=account)
