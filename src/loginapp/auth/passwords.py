# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

import argon2
from argon2.exceptions import Argon2Error, InvalidHashError, VerificationError, VerifyMismatchError

from loginapp.errors import HashFormatError, HasherError


class PasswordHasher:
    """Salted one-way hashing with a tunable work factor.

    ``time_cost`` is argon2's iteration count; ``None`` keeps the library
    default. Every call to :meth:`hash` draws a fresh salt, so hashing the same
    password twice gives two different strings that both verify.
    """

    def __init__(self, time_cost: Optional[int] = None):
        if time_cost is None:
            self._ph = argon2.PasswordHasher()
        else:
            self._ph = argon2.PasswordHasher(time_cost=time_cost)

    @property
    def time_cost(self) -> int:
        return self._ph.time_cost

    def hash(self, plain: str) -> str:
        if plain is None:
            raise ValueError("Password missing")
        return self._ph.hash(plain)

    def verify(self, plain: str, hash_value: str) -> bool:
        # argon2 compares digests in constant time
        try:
            return self._ph.verify(hash_value, plain)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            raise HashFormatError("Stored password hash is malformed") from e
        except (Argon2Error, UnicodeError) as e:
            raise HasherError(f"Password verification failed: {type(e).__name__}") from e
