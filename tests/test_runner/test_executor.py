"""Tests for the runner executor."""

import io
import json
from unittest.mock import AsyncMock, patch

import pytest

from scope_context import BlobStoreError
from scope_context.blobs import InMemoryBlobStore
from scope_context.runner import __main__ as runner_main
from scope_context.runner.executor import Executor
from scope_context.runner.schema import (
    BlobStoreConfigSchema,
    OperationSchema,
    RunnerInput,
)


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def executor(blob_store):
    return Executor(blob_store=blob_store)


def make_input(*operations, **settings):
    return RunnerInput(
        settings={"bucket": "b", "prefix": "p", **settings},
        operations=[OperationSchema(**op) for op in operations],
    )


class TestExecute:
    """Tests for Executor.execute()."""

    async def test_set_then_get(self, executor, blob_store):
        output = await executor.execute(
            make_input(
                {"op": "set", "scope": "s", "keys": ["k1", "k2"], "values": ["v1", {"n": 1}]},
                {"op": "get", "scope": "s", "keys": ["k1", "k2", "absent"]},
            )
        )

        assert output.success
        assert await blob_store.fetch("p/context/s.json") == b'{"k1":"v1","k2":{"n":1}}'
        get_result = output.results[1]
        assert get_result.values == {"k1": "v1", "k2": {"n": 1}, "absent": None}
        assert get_result.missing == ["absent"]

    async def test_keys_delete_clean(self, executor, blob_store):
        await blob_store.store("p/context/a.json", b'{"x":1}', "application/json")

        output = await executor.execute(
            make_input(
                {"op": "keys", "scope": "a"},
                {"op": "delete", "scope": "a"},
                {"op": "clean", "scopes": ["gone-1", "gone-2"]},
                {"op": "clear_cache"},
            )
        )

        assert output.success
        assert output.results[0].keys == ["x"]
        assert blob_store.paths() == []
        assert [r.op for r in output.results] == ["keys", "delete", "clean", "clear_cache"]

    async def test_stops_at_first_failure(self, executor, blob_store):
        output = await executor.execute(
            make_input(
                {"op": "set", "scope": "s", "keys": ["a"], "values": [1]},
                {"op": "set", "scope": "s", "keys": ["a", "b"], "values": [1]},
                {"op": "delete", "scope": "s"},
            )
        )

        assert not output.success
        assert output.failed_index == 1
        assert output.error_type == "ContextValidationError"
        assert len(output.results) == 1
        assert blob_store.paths() == ["p/context/s.json"]

    async def test_store_error_reported(self, executor, blob_store):
        failing = AsyncMock(side_effect=BlobStoreError("remove", "p/context/s.json", "denied"))
        with patch.object(blob_store, "remove", failing):
            output = await executor.execute(make_input({"op": "delete", "scope": "s"}))

        assert not output.success
        assert output.error_type == "BlobStoreError"
        assert "denied" in output.error

    async def test_missing_scope_rejected(self, executor):
        output = await executor.execute(make_input({"op": "keys"}))

        assert not output.success
        assert output.failed_index == 0
        assert "requires a scope" in output.error

    async def test_invalid_settings(self, executor):
        output = await executor.execute(RunnerInput(settings={}, operations=[]))

        assert not output.success
        assert output.error_type == "ContextConfigError"
        assert output.failed_index is None

    async def test_unknown_store_type(self):
        input_data = RunnerInput(
            settings={"bucket": "b"},
            store=BlobStoreConfigSchema(type="tape"),
        )

        output = await Executor().execute(input_data)

        assert not output.success
        assert output.error_type == "BlobStoreFactoryError"
        assert "Unknown store type 'tape'" in output.error

    async def test_sqlite_store_from_config(self, tmp_path):
        db_path = str(tmp_path / "ctx.db")
        write = RunnerInput(
            settings={"bucket": "b"},
            store=BlobStoreConfigSchema(type="sqlite", path=db_path),
            operations=[OperationSchema(op="set", scope="s", keys=["k"], values=[1])],
        )
        read = write.model_copy(
            update={"operations": [OperationSchema(op="get", scope="s", keys=["k"])]}
        )

        assert (await Executor().execute(write)).success
        output = await Executor().execute(read)

        assert output.success
        assert output.results[0].values == {"k": 1}


class TestMain:
    """Tests for the stdin/stdout entry point."""

    def test_success(self, monkeypatch, capsys):
        payload = {
            "settings": {"bucket": "b"},
            "store": {"type": "memory"},
            "operations": [{"op": "get", "scope": "s", "keys": ["k"]}],
        }
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(payload)))

        assert runner_main.main() == 0

        output = json.loads(capsys.readouterr().out)
        assert output["success"] is True
        assert output["results"][0]["missing"] == ["k"]

    def test_invalid_json(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("{not json"))

        assert runner_main.main() == 1

        output = json.loads(capsys.readouterr().out)
        assert output["success"] is False
        assert output["error_type"] == "ValidationError"

    def test_unknown_operation(self, monkeypatch, capsys):
        payload = {"settings": {"bucket": "b"}, "operations": [{"op": "rename", "scope": "s"}]}
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(payload)))

        assert runner_main.main() == 1
        assert json.loads(capsys.readouterr().out)["success"] is False
