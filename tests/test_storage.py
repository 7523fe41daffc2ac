import json

import pytest
import redis

from vocabforge.exceptions import StorageError
from vocabforge.redis_store import RedisStore
from vocabforge.service import StorageService
from vocabforge.storage import JsonState, KeyValueStore, MemoryStore


class BrokenStore(KeyValueStore):
    def get(self, key):
        raise StorageError(key, "quota exceeded")

    def set(self, key, raw):
        raise StorageError(key, "quota exceeded")


class StubPipeline:
    def __init__(self, client):
        self.client = client
        self.queued = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def set(self, key, value):
        self.queued.append((key, value))

    def execute(self):
        self.client.executions += 1
        for key, value in self.queued:
            self.client.data[key] = value


class StubRedis:
    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail
        self.executions = 0

    def get(self, key):
        if self.fail:
            raise redis.exceptions.ConnectionError("connection refused")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail:
            raise redis.exceptions.ConnectionError("connection refused")
        self.data[key] = value

    def pipeline(self, transaction=True):
        if self.fail:
            raise redis.exceptions.ConnectionError("connection refused")
        return StubPipeline(self)


class TestJsonState:
    def test_missing_key_reads_as_empty_without_error(self):
        result = JsonState(MemoryStore()).read("words")
        assert result.ok
        assert result.value is None
        assert result.unwrap_or([]) == []

    def test_keys_are_prefixed(self):
        store = MemoryStore()
        JsonState(store, prefix="vocabforge.").write("words", [1, 2])
        assert json.loads(store.data["vocabforge.words"]) == [1, 2]

    def test_corrupt_json_reports_error_and_falls_back(self):
        store = MemoryStore({"vocabforge.results": "{not json"})
        result = JsonState(store).read("results")
        assert not result.ok
        assert result.error.key == "vocabforge.results"
        assert result.unwrap_or([]) == []

    def test_no_backend_reads_fallback_and_skips_writes(self):
        state = JsonState(None)
        assert not state.read("words").ok
        assert state.read("words").unwrap_or({}) == {}
        assert state.write("words", []) is False

    def test_failing_backend_never_raises(self):
        state = JsonState(BrokenStore())
        assert state.read("words").unwrap_or([]) == []
        assert state.write_many({"words": [], "results": []}) is False


class TestRedisStore:
    def test_round_trip_through_client(self):
        client = StubRedis()
        store = RedisStore(client)
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_set_many_uses_one_transaction(self):
        client = StubRedis()
        RedisStore(client).set_many({"a": "1", "b": "2"})
        assert client.executions == 1
        assert client.data == {"a": "1", "b": "2"}

    def test_redis_errors_become_storage_errors(self):
        store = RedisStore(StubRedis(fail=True))
        with pytest.raises(StorageError):
            store.get("k")
        with pytest.raises(StorageError):
            store.set_many({"a": "1"})

    def test_service_survives_unreachable_redis(self):
        service = StorageService(RedisStore(StubRedis(fail=True)))
        assert service.get_words() == []
        assert service.save_words([{"word": "w", "meaning": "m", "options": ["1", "2", "3", "m"]}])
        assert service.get_prioritized_words() == []
        results = service.save_result({"score": 1, "total": 1, "history": []})
        assert len(results) == 1


def test_service_without_backend_degrades(clock):
    service = StorageService(None, clock=clock)
    assert service.get_results() == []
    assert service.get_weak_words_map() == {}
    assert service.save_result({"score": 3, "total": 4})[0].score == 3
    assert service.get_results() == []
