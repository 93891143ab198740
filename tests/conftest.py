"""
Shared pytest fixtures for docmapper tests.

Provides an in-memory stand-in for pymongo's AsyncDatabase / AsyncCollection so that the persistence
protocol can be tested without a running MongoDB. Results are real pymongo result objects.
"""

import copy
from typing import Any

import pytest
from pymongo.results import DeleteResult, UpdateResult


def _matches(record: dict, filter: dict | None) -> bool:
    """Top-level equality matching only."""
    return all(record.get(key) == value for key, value in (filter or {}).items())


def _apply_update(record: dict, update: dict) -> dict:
    """Apply $set / $unset (dot notation allowed) to a copy of the record."""
    updated = copy.deepcopy(record)
    for path, value in update.get("$set", {}).items():
        *parents, last = path.split(".")
        target = updated
        for part in parents:
            target = target.setdefault(part, {})
        target[last] = copy.deepcopy(value)
    for path in update.get("$unset", {}):
        *parents, last = path.split(".")
        target = updated
        for part in parents:
            target = target.get(part, {})
        target.pop(last, None)
    return updated


class FakeCollection:
    """
    In-memory async collection.

    Records every call in `calls` as (method name, args, kwargs) so tests can assert what was sent.
    """

    def __init__(self, name: str):
        self.name = name
        self.documents: dict[Any, dict] = {}
        self.calls: list[tuple[str, tuple, dict]] = []

    def _find(self, filter: dict | None) -> list[dict]:
        return [record for record in self.documents.values() if _matches(record, filter)]

    async def replace_one(self, filter, replacement, upsert=False, **kwargs):
        self.calls.append(("replace_one", (filter, replacement), {"upsert": upsert, **kwargs}))
        matches = self._find(filter)
        if matches:
            existing = matches[0]
            new_record = copy.deepcopy(dict(replacement))
            new_record["_id"] = existing["_id"]
            modified = int(new_record != existing)
            self.documents[existing["_id"]] = new_record
            return UpdateResult({"n": 1, "nModified": modified, "ok": 1.0}, True)
        if upsert:
            new_record = copy.deepcopy(dict(replacement))
            new_record.setdefault("_id", filter.get("_id"))
            self.documents[new_record["_id"]] = new_record
            return UpdateResult({"n": 1, "nModified": 0, "upserted": new_record["_id"], "ok": 1.0}, True)
        return UpdateResult({"n": 0, "nModified": 0, "ok": 1.0}, True)

    async def update_one(self, filter, update, **kwargs):
        self.calls.append(("update_one", (filter, update), kwargs))
        matches = self._find(filter)
        if not matches:
            return UpdateResult({"n": 0, "nModified": 0, "ok": 1.0}, True)
        existing = matches[0]
        updated = _apply_update(existing, update)
        self.documents[existing["_id"]] = updated
        return UpdateResult({"n": 1, "nModified": int(updated != existing), "ok": 1.0}, True)

    async def update_many(self, filter, update, **kwargs):
        self.calls.append(("update_many", (filter, update), kwargs))
        modified = 0
        matches = self._find(filter)
        for existing in matches:
            updated = _apply_update(existing, update)
            modified += int(updated != existing)
            self.documents[existing["_id"]] = updated
        return UpdateResult({"n": len(matches), "nModified": modified, "ok": 1.0}, True)

    async def count_documents(self, filter, **kwargs):
        self.calls.append(("count_documents", (filter,), kwargs))
        return len(self._find(filter))

    async def distinct(self, key, filter=None, **kwargs):
        self.calls.append(("distinct", (key, filter), kwargs))
        values = []
        for record in self._find(filter):
            if key in record and record[key] not in values:
                values.append(record[key])
        return values

    async def find(self, filter=None, *args, **kwargs):
        self.calls.append(("find", (filter, *args), kwargs))
        for record in self._find(filter):
            yield copy.deepcopy(record)

    async def find_one(self, filter=None, *args, **kwargs):
        self.calls.append(("find_one", (filter, *args), kwargs))
        matches = self._find(filter)
        return copy.deepcopy(matches[0]) if matches else None

    async def delete_one(self, filter, **kwargs):
        self.calls.append(("delete_one", (filter,), kwargs))
        matches = self._find(filter)
        if matches:
            del self.documents[matches[0]["_id"]]
        return DeleteResult({"n": len(matches[:1]), "ok": 1.0}, True)

    async def delete_many(self, filter, **kwargs):
        self.calls.append(("delete_many", (filter,), kwargs))
        matches = self._find(filter)
        for record in matches:
            del self.documents[record["_id"]]
        return DeleteResult({"n": len(matches), "ok": 1.0}, True)

    async def find_one_and_delete(self, filter, **kwargs):
        self.calls.append(("find_one_and_delete", (filter,), kwargs))
        matches = self._find(filter)
        if not matches:
            return None
        return self.documents.pop(matches[0]["_id"])

    async def find_one_and_replace(self, filter, replacement, **kwargs):
        self.calls.append(("find_one_and_replace", (filter, replacement), kwargs))
        matches = self._find(filter)
        if not matches:
            return None
        existing = matches[0]
        new_record = copy.deepcopy(dict(replacement))
        new_record["_id"] = existing["_id"]
        self.documents[existing["_id"]] = new_record
        return copy.deepcopy(existing)

    async def find_one_and_update(self, filter, update, **kwargs):
        self.calls.append(("find_one_and_update", (filter, update), kwargs))
        matches = self._find(filter)
        if not matches:
            return None
        existing = matches[0]
        self.documents[existing["_id"]] = _apply_update(existing, update)
        return copy.deepcopy(existing)

    def writes(self) -> list[tuple[str, tuple, dict]]:
        """Calls which could change stored data."""
        return [call for call in self.calls if call[0] in ("replace_one", "update_one")]


class FakeDatabase:
    """In-memory async database handing out FakeCollections by name."""

    def __init__(self, name: str = "testdb"):
        self.name = name
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, collection_name: str) -> FakeCollection:
        if collection_name not in self.collections:
            self.collections[collection_name] = FakeCollection(collection_name)
        return self.collections[collection_name]


@pytest.fixture
def db():
    """Fresh in-memory database."""
    return FakeDatabase()


@pytest.fixture
def users(db):
    """Schemaless model over the 'users' collection."""
    from docmapper import create_model
    return create_model(db, "users")


@pytest.fixture
def users_collection(db, users):
    return db["users"]
