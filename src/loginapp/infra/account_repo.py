# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""MongoDB-backed account store.

One document per account in a single collection::

    {"_id": ObjectId, "username": str, "email": str, "password_hash": str}

Neither ``username`` nor ``email`` is unique; signup inserts unconditionally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from loginapp.config import DEFAULT_DB_NAME, Settings
from loginapp.errors import PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    id: str
    username: str
    email: str
    password_hash: str

    def public_dict(self) -> Dict[str, str]:
        return {"id": self.id, "username": self.username, "email": self.email}


def _from_doc(doc: Dict[str, Any]) -> Account:
    return Account(
        id=str(doc.get("_id", "")),
        username=str(doc.get("username") or ""),
        email=str(doc.get("email") or ""),
        password_hash=str(doc.get("password_hash") or ""),
    )


def connect(settings: Settings) -> Collection:
    """Return the accounts collection described by ``settings``.

    The client connects lazily: an unreachable server only shows up on the
    first query, as a :class:`PersistenceError`.
    """
    client: MongoClient = MongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
    )
    if settings.mongo_db:
        db = client[settings.mongo_db]
    else:
        db = client.get_default_database(default=DEFAULT_DB_NAME)
    return db[settings.mongo_collection]


class AccountRepository:
    def __init__(self, collection: Collection):
        self._col = collection

    def ensure_indexes(self) -> None:
        # Login lookup index (non-unique)
        try:
            self._col.create_index([("email", ASCENDING)], name="email_lookup")
        except PyMongoError as e:
            raise PersistenceError(f"Could not create indexes: {type(e).__name__}") from e

    def find_by_email(self, email: str) -> Optional[Account]:
        """Return the first inserted account with this email, if any."""
        try:
            doc = self._col.find_one({"email": email}, sort=[("_id", ASCENDING)])
        except PyMongoError as e:
            raise PersistenceError(f"Account lookup failed: {type(e).__name__}") from e
        if doc is None:
            return None
        return _from_doc(doc)

    def create(self, username: str, password_hash: str, email: str) -> Account:
        doc = {"username": username, "email": email, "password_hash": password_hash}
        try:
            result = self._col.insert_one(doc)
        except PyMongoError as e:
            raise PersistenceError(f"Account insert failed: {type(e).__name__}") from e
        logger.debug("Inserted account %s", result.inserted_id)
        return _from_doc({**doc, "_id": result.inserted_id})

