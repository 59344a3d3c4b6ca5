# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - document_config   → DocumentConfig for bucket "b" with default paths
# - structured        → FakeStructuredGateway (in-memory, records calls)
# - blob              → FakeBlobGateway (in-memory, records calls)
# - inconsistencies   → list collecting reported Inconsistency objects
# - router            → PlacementRouter wired to the fakes
# - coordinator       → MigrationCoordinator sharing the router
# - client            → DocumentClient wired to the fakes
# - small_content / large_content
#
# The fakes can be told to fail a method via `fail_on[method] = exc`.
# ==============================================

import copy
import os

import pytest
from botocore.exceptions import ClientError

from offload_store.config import DocumentConfig, reset_config
from offload_store.document_client import DocumentClient
from offload_store.storage.migrator import MigrationCoordinator
from offload_store.storage.placement_router import PlacementRouter


def client_error(code: str = "InternalError", operation: str = "PutObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{code} raised by fake"}}, operation)


class FakeStructuredGateway:
    """In-memory stand-in for a DynamoDB table keyed on a top-level 'Path'."""

    def __init__(self, key_field: str = "Path"):
        self.key_field = key_field
        self.items = {}
        self.calls = []
        self.fail_on = {}

    def _record(self, method, *args, **params):
        self.calls.append((method, args, params))
        if method in self.fail_on:
            raise self.fail_on[method]

    def methods_called(self):
        return [call[0] for call in self.calls]

    def get(self, key, **params):
        self._record("get", key, **params)
        item = self.items.get(key[self.key_field])
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def put(self, item, **params):
        self._record("put", copy.deepcopy(item), **params)
        old = self.items.get(item[self.key_field])
        self.items[item[self.key_field]] = copy.deepcopy(item)
        if params.get("ReturnValues") == "ALL_OLD" and old is not None:
            return {"Attributes": old}
        return {}

    def delete(self, key, **params):
        self._record("delete", key, **params)
        old = self.items.pop(key[self.key_field], None)
        return {"Attributes": old} if old is not None else {}

    def update(self, key, **params):
        self._record("update", key, **params)
        return {"Attributes": copy.deepcopy(self.items.get(key[self.key_field]))}

    def batch_get(self, **params):
        self._record("batch_get", **params)
        return {"Responses": {}}

    def batch_write(self, **params):
        self._record("batch_write", **params)
        return {"UnprocessedItems": {}}

    def query(self, **params):
        self._record("query", **params)
        return {"Items": [], "Count": 0}

    def scan(self, **params):
        self._record("scan", **params)
        return {"Items": list(self.items.values()), "Count": len(self.items)}


class FakeBlobGateway:
    """In-memory stand-in for an S3 bucket."""

    def __init__(self):
        self.objects = {}
        self.calls = []
        self.fail_on = {}

    def _record(self, method, key):
        self.calls.append((method, key))
        if method in self.fail_on:
            raise self.fail_on[method]

    def methods_called(self):
        return [call[0] for call in self.calls]

    def get(self, key):
        self._record("get", key)
        if key not in self.objects:
            raise client_error("NoSuchKey", "GetObject")
        return self.objects[key]

    def put(self, key, body):
        self._record("put", key)
        self.objects[key] = body

    def delete(self, key):
        self._record("delete", key)
        self.objects.pop(key, None)


@pytest.fixture(autouse=True)
def clean_config_singleton():
    """Make sure no test sees configuration cached by another."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def document_config():
    return DocumentConfig(bucket_name="b")


@pytest.fixture
def structured():
    return FakeStructuredGateway()


@pytest.fixture
def blob():
    return FakeBlobGateway()


@pytest.fixture
def inconsistencies():
    return []


@pytest.fixture
def router(structured, blob, document_config, inconsistencies):
    return PlacementRouter(structured, blob, document_config, on_inconsistency=inconsistencies.append)


@pytest.fixture
def coordinator(router):
    return MigrationCoordinator(router)


@pytest.fixture
def client(structured, blob, document_config, inconsistencies):
    return DocumentClient(structured, blob, document_config, on_inconsistency=inconsistencies.append)


@pytest.fixture
def small_content():
    """10 bytes of text; always fits in the structured store."""
    return "ten bytes!"


@pytest.fixture
def large_content():
    """400 KiB of random bytes; always offloaded."""
    return os.urandom(400 * 1024)
