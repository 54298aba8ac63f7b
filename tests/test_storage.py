"""
Tests for the storage backends and the storage factory.
"""

import pytest
import redis
from datetime import datetime, timezone
from unittest.mock import MagicMock

from nonceguard import NonceManager, NonceRecord, ManualClock
from nonceguard.store import (
    StorageEngine,
    StorageError,
    StorageUnavailableError,
    MemoryStorage,
    SessionStorage,
    RedisStorage,
    StorageConfig,
    StorageFactory,
    create_memory_store,
    create_storage,
)


SECRET = "storage-test-secret"
RECORD = NonceRecord(value="abc123", expires_at=datetime(2030, 1, 1, tzinfo=timezone.utc))


class FakeSession(dict):
    """Mimics a framework session that tracks modification"""
    modified = False


def fake_redis_client():
    """Build a MagicMock Redis client backed by a dict"""
    data = {}
    client = MagicMock(spec=redis.Redis)
    client.get.side_effect = lambda key: data.get(key)
    client.set.side_effect = lambda key, value: data.__setitem__(key, value.encode()) or True
    client.exists.side_effect = lambda key: int(key in data)
    client.delete.side_effect = lambda key: int(data.pop(key, None) is not None)
    client.ping.return_value = True
    client.data = data
    return client


class TestMemoryStorage:
    """Test the in-memory backend"""

    def test_contract(self):
        storage = MemoryStorage()
        assert isinstance(storage, StorageEngine)

        assert storage.has("form") is False
        storage.set("form", RECORD)
        assert storage.has("form") is True
        assert storage.get("form") is RECORD

        storage.delete("form")
        assert storage.has("form") is False

    def test_delete_absent(self):
        storage = MemoryStorage()
        storage.delete("missing")
        assert storage.get_count() == 0

    def test_set_replaces(self):
        storage = MemoryStorage()
        storage.set("form", 1)
        storage.set("form", 2)

        assert storage.get("form") == 2
        assert storage.get_count() == 1

    def test_clear_all(self):
        storage = create_memory_store()
        storage.set("a", 1)
        storage.set("b", 2)

        storage.clear_all()

        assert storage.get_count() == 0


class TestSessionStorage:
    """Test the session-backed backend"""

    def test_lazy_namespace(self):
        """The namespace is created on first use, not at construction"""
        session = FakeSession()
        storage = SessionStorage(session)
        assert "nonces" not in session

        assert storage.has("form") is False
        assert session["nonces"] == {}

    def test_contract(self):
        session = FakeSession()
        storage = SessionStorage(session, namespace="csrf")

        storage.set("form", RECORD)
        assert session.modified is True
        assert session["csrf"] == {"form": RECORD}
        assert storage.get("form") is RECORD

        storage.delete("form")
        storage.delete("form")
        assert storage.has("form") is False

    def test_callable_provider(self):
        """A provider callable is consulted on every call"""
        sessions = [FakeSession(), FakeSession()]
        current = {"session": sessions[0]}
        storage = SessionStorage(lambda: current["session"])

        storage.set("form", RECORD)
        current["session"] = sessions[1]

        assert storage.has("form") is False
        assert "form" in sessions[0]["nonces"]

    def test_serializer_round_trip(self):
        """Cookie sessions can hold plain dictionaries"""
        session = {}
        storage = SessionStorage(
            session,
            serializer=NonceRecord.to_dict,
            deserializer=NonceRecord.from_dict,
        )

        storage.set("form", RECORD)

        assert session["nonces"]["form"] == {"value": "abc123", "expires_at": RECORD.expires_at.isoformat()}
        assert storage.get("form") == RECORD

    def test_missing_session(self):
        storage = SessionStorage(lambda: None)

        with pytest.raises(StorageUnavailableError) as exc_info:
            storage.has("form")

        assert exc_info.value.operation == "session"

    def test_failing_provider(self):
        def provider():
            raise RuntimeError("working outside of request context")

        storage = SessionStorage(provider)

        with pytest.raises(StorageUnavailableError) as exc_info:
            storage.set("form", RECORD)

        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_non_mapping_session(self):
        storage = SessionStorage(lambda: "not a session")
        with pytest.raises(StorageUnavailableError):
            storage.has("form")

    def test_empty_namespace(self):
        with pytest.raises(ValueError):
            SessionStorage({}, namespace="")

    def test_with_manager(self):
        clock = ManualClock()
        session = FakeSession()
        manager = NonceManager(SECRET, SessionStorage(session), clock=clock)

        value = manager.create("form", 30)
        assert manager.verify("form", value) is True
        assert session["nonces"] == {}


class TestRedisStorage:
    """Test the Redis backend against a mocked client"""

    def test_contract(self):
        client = fake_redis_client()
        storage = RedisStorage(client=client)

        storage.set("form", RECORD)
        assert "nonceguard:form" in client.data
        assert storage.has("form") is True
        assert storage.get("form") == RECORD

        storage.delete("form")
        assert storage.has("form") is False

    def test_key_prefix(self):
        client = fake_redis_client()
        storage = RedisStorage(client=client, key_prefix="app:csrf:")

        storage.set("form", RECORD)

        assert list(client.data) == ["app:csrf:form"]

    def test_no_ttl_is_set(self):
        """Expired records stay until deleted"""
        client = fake_redis_client()
        storage = RedisStorage(client=client)

        storage.set("form", RECORD)

        client.expire.assert_not_called()
        client.setex.assert_not_called()

    def test_get_missing(self):
        storage = RedisStorage(client=fake_redis_client())
        with pytest.raises(KeyError):
            storage.get("missing")

    def test_connection_error(self):
        """Connection failures surface as an unavailable backend"""
        client = fake_redis_client()
        client.exists.side_effect = redis.ConnectionError("connection refused")
        storage = RedisStorage(client=client)

        with pytest.raises(StorageUnavailableError) as exc_info:
            storage.has("form")

        assert exc_info.value.operation == "has"
        assert exc_info.value.key == "form"

    def test_other_redis_error(self):
        client = fake_redis_client()
        client.set.side_effect = redis.ResponseError("WRONGTYPE")
        storage = RedisStorage(client=client)

        with pytest.raises(StorageError) as exc_info:
            storage.set("form", RECORD)

        assert not isinstance(exc_info.value, StorageUnavailableError)

    def test_invalid_url(self):
        with pytest.raises(StorageUnavailableError):
            RedisStorage(url="ftp://nowhere")

    def test_ping_and_close(self):
        client = fake_redis_client()
        storage = RedisStorage(client=client)

        assert storage.ping() is True
        storage.close()
        client.close.assert_called_once()

    def test_with_manager(self):
        clock = ManualClock()
        manager = NonceManager(SECRET, RedisStorage(client=fake_redis_client()), clock=clock)

        value = manager.create("form", 30)
        assert manager.get("form") == value

        clock.advance(31)
        assert manager.verify("form", value) is False
        assert manager.get("form", allow_expired=True) == value


class TestStorageFactory:
    """Test backend creation from configuration"""

    def test_available_types(self):
        assert {"memory", "session", "redis"} <= set(StorageFactory.get_available_types())

    def test_create_memory(self):
        assert isinstance(create_storage(StorageConfig()), MemoryStorage)

    def test_create_session(self):
        session = {}
        storage = create_storage(StorageConfig(store_type="session", session=session, namespace="csrf"))

        assert isinstance(storage, SessionStorage)
        assert storage.namespace == "csrf"

    def test_create_redis(self):
        storage = create_storage(StorageConfig(
            store_type="Redis", redis_url="redis://cache:6380/2", key_prefix="x:"
        ))

        assert isinstance(storage, RedisStorage)
        assert storage.key_prefix == "x:"

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            StorageFactory.create_store("carrier-pigeon")

    def test_register_implementation(self):
        StorageFactory.register_implementation("Custom", MemoryStorage)

        assert isinstance(StorageFactory.create_store("custom"), MemoryStorage)

    def test_config_to_dict(self):
        config = StorageConfig(store_type="redis", redis_url="redis://localhost")
        assert config.to_dict()["redis_url"] == "redis://localhost"
