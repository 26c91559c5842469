"""
Unit tests for QueryClient against a recording executor.
"""

import asyncio

import pytest

from sql_assembler.client import QueryClient
from sql_assembler.exceptions import QueryExecutionError, QueryValidationError
from sql_assembler.io.connection import Database
from sql_assembler.models import MutationResult
from sql_assembler.presets import PresetsMixin


class TestFind:
    @pytest.mark.asyncio
    async def test_find_passes_compiled_query(self, client, executor):
        executor.result = [{"id": 1, "name": "Ana"}]

        rows = await client.find({"table": "users", "where": {"a": 1, "b": 2}})

        assert rows == [{"id": 1, "name": "Ana"}]
        assert executor.calls == [
            ("SELECT * FROM `users` WHERE `a` = ? AND `b` = ?", [1, 2])
        ]

    @pytest.mark.asyncio
    async def test_find_without_table_never_executes(self, client, executor):
        with pytest.raises(QueryValidationError):
            await client.find({})
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_driver_error_is_wrapped(self, client, executor):
        driver_error = RuntimeError("Table 'shop.users' doesn't exist")
        executor.error = driver_error

        with pytest.raises(QueryExecutionError) as exc_info:
            await client.find({"table": "users"})

        assert exc_info.value.__cause__ is driver_error
        assert exc_info.value.sql == "SELECT * FROM `users`"
        details = exc_info.value.to_dict()
        assert details["original_error_type"] == "RuntimeError"
        assert details["sql"] == "SELECT * FROM `users`"

    @pytest.mark.asyncio
    async def test_postgresql_client(self, database, executor):
        client = QueryClient(database, dialect="postgresql")
        await client.find({"table": "users", "columns": ["id"]})
        assert executor.last_sql == 'SELECT "id" FROM "users"'


class TestMutations:
    @pytest.mark.asyncio
    async def test_insert(self, client, executor):
        executor.result = MutationResult(affected_rows=1, last_insert_id=42)

        result = await client.insert("users", {"name": "Ana", "age": 30})

        assert result == MutationResult(affected_rows=1, last_insert_id=42)
        assert executor.last_sql == "INSERT INTO `users` (`name`, `age`) VALUES (?, ?)"
        assert executor.last_params == ["Ana", 30]

    @pytest.mark.asyncio
    async def test_insert_empty_row(self, client, executor):
        with pytest.raises(QueryValidationError):
            await client.insert("users", {})
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_update(self, client, executor):
        await client.update({"table": "t", "set": {"x": 1}, "where": {"id": 2}})

        assert executor.last_sql == "UPDATE `t` SET `x` = ? WHERE `id` = ?"
        assert executor.last_params == [1, 2]

    @pytest.mark.asyncio
    async def test_delete_records(self, client, executor):
        await client.delete_records({"table": "users", "where": {"id": 7}})

        assert executor.last_sql == "DELETE FROM `users` WHERE `id` = ?"
        assert executor.last_params == [7]

    @pytest.mark.asyncio
    async def test_create_table_is_awaited(self, client, executor):
        executor.result = MutationResult(affected_rows=0)

        result = await client.create_table("teams", {"id": "INT PRIMARY KEY"})

        assert result.affected_rows == 0
        assert executor.last_sql == "CREATE TABLE IF NOT EXISTS `teams` (`id` INT PRIMARY KEY)"

    @pytest.mark.asyncio
    async def test_create_table_failure_surfaces(self, client, executor):
        executor.error = RuntimeError("syntax error")

        with pytest.raises(QueryExecutionError):
            await client.create_table("teams", {"id": "NOT A TYPE"})


class TestRawQuery:
    @pytest.mark.asyncio
    async def test_forwarded_verbatim(self, client, executor):
        sql = "SELECT COUNT(*) AS n FROM users WHERE age > ?"
        await client.raw_query(sql, [18])
        assert executor.calls == [(sql, [18])]

    @pytest.mark.asyncio
    async def test_params_default_to_empty(self, client, executor):
        await client.raw_query("SELECT 1")
        assert executor.last_params == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sql", ["", "   ", None, 42])
    async def test_invalid_sql(self, client, executor, sql):
        with pytest.raises(QueryValidationError):
            await client.raw_query(sql)
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_params_must_be_sequence(self, client):
        with pytest.raises(QueryValidationError):
            await client.raw_query("SELECT ?", "abc")


class TestConnectionState:
    @pytest.mark.asyncio
    async def test_no_connection(self, settings):
        client = QueryClient(Database(settings=settings))

        with pytest.raises(QueryExecutionError, match="not available"):
            await client.find({"table": "users"})

    @pytest.mark.asyncio
    async def test_timeout(self, client, executor):
        async def slow_execute(sql, params):
            await asyncio.sleep(1)
            return []

        executor.execute = slow_execute

        with pytest.raises(QueryExecutionError, match="timed out"):
            await client.find({"table": "users"}, timeout=0.01)

    @pytest.mark.asyncio
    async def test_default_timeout_from_settings(self, settings, executor):
        async def slow_execute(sql, params):
            await asyncio.sleep(1)
            return []

        executor.execute = slow_execute
        settings.query_timeout = 0.01
        client = QueryClient(Database(settings=settings, executor=executor))

        with pytest.raises(QueryExecutionError, match="timed out"):
            await client.raw_query("SELECT 1")


class TestPresets:
    """Legacy selectors only populate a spec and delegate to find."""

    @pytest.mark.asyncio
    async def test_find_all(self, client, executor):
        await client.find_all("users", limit=5, offset=10)
        assert executor.last_sql == "SELECT * FROM `users` LIMIT 5 OFFSET 10"

    @pytest.mark.asyncio
    async def test_find_columns(self, client, executor):
        await client.find_columns("users", ["id", "name"])
        assert executor.last_sql == "SELECT `id`, `name` FROM `users`"

    @pytest.mark.asyncio
    async def test_find_columns_defaults_to_star(self, client, executor):
        await client.find_columns("users")
        assert executor.last_sql == "SELECT * FROM `users`"

    @pytest.mark.asyncio
    async def test_find_by_where(self, client, executor):
        await client.find_by_where("users", {"a": 1, "b": 2})

        assert executor.last_sql == "SELECT * FROM `users` WHERE `a` = ? AND `b` = ?"
        assert executor.last_params == [1, 2]

    @pytest.mark.asyncio
    async def test_find_by_where_empty(self, client, executor):
        await client.find_by_where("users", {}, limit=3)
        assert executor.last_sql == "SELECT * FROM `users` LIMIT 3"

    @pytest.mark.asyncio
    async def test_find_by_or(self, client, executor):
        await client.find_by_or("users", {"a": 1, "b": 2})
        assert executor.last_sql == "SELECT * FROM `users` WHERE `a` = ? OR `b` = ?"

    @pytest.mark.parametrize(
        "method, where_join, having_join",
        [
            ("find_group", "AND", "AND"),
            ("find_group_by_or", "OR", "OR"),
            ("find_group_by_or_and", "OR", "AND"),
            ("find_group_by_and_or", "AND", "OR"),
        ],
    )
    @pytest.mark.asyncio
    async def test_group_variants(self, client, executor, method, where_join, having_join):
        await getattr(client, method)(
            "orders",
            ["user_id"],
            having={"n": {">": 1}, "total": {">=": 100}},
            where={"status": "paid", "channel": "web"},
            selected=["user_id", "COUNT(*) AS n", "SUM(amount) AS total"],
        )

        assert executor.last_sql == (
            "SELECT user_id, COUNT(*) AS n, SUM(amount) AS total FROM `orders` "
            f"WHERE `status` = ? {where_join} `channel` = ? "
            "GROUP BY `user_id` "
            f"HAVING `n` > ? {having_join} `total` >= ?"
        )
        assert executor.last_params == ["paid", "web", 1, 100]

    @pytest.mark.asyncio
    async def test_group_requires_columns(self, client, executor):
        with pytest.raises(QueryValidationError):
            await client.find_group("orders", [])
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_group_selected_defaults_to_star(self, client, executor):
        await client.find_group("orders", ["user_id"])
        assert executor.last_sql == "SELECT * FROM `orders` GROUP BY `user_id`"

    @pytest.mark.parametrize(
        "method, expected",
        [
            ("find_with_order_asc", "WHERE `a` = ? AND `b` = ? ORDER BY `created` ASC"),
            ("find_with_order_asc_by_or", "WHERE `a` = ? OR `b` = ? ORDER BY `created` ASC"),
            ("find_with_order_desc", "WHERE `a` = ? AND `b` = ? ORDER BY `created` DESC"),
            ("find_with_order_desc_by_or", "WHERE `a` = ? OR `b` = ? ORDER BY `created` DESC"),
        ],
    )
    @pytest.mark.asyncio
    async def test_order_variants(self, client, executor, method, expected):
        await getattr(client, method)(
            "posts", where={"a": 1, "b": 2}, order_by="created", limit=10
        )
        assert executor.last_sql == f"SELECT * FROM `posts` {expected} LIMIT 10"

    @pytest.mark.asyncio
    async def test_order_override(self, client, executor):
        await client.find_with_order_asc("posts", order_by="created", order="desc")
        assert executor.last_sql == "SELECT * FROM `posts` ORDER BY `created` DESC"

    @pytest.mark.asyncio
    async def test_order_without_column(self, client, executor):
        await client.find_with_order_desc("posts")
        assert executor.last_sql == "SELECT * FROM `posts`"

    def test_mixin_requires_find(self):
        with pytest.raises(TypeError):
            PresetsMixin()

    @pytest.mark.asyncio
    async def test_subclass_supplying_find_is_usable(self):
        class StaticRows(PresetsMixin):
            def __init__(self):
                self.specs = []

            async def find(self, spec, timeout=None):
                self.specs.append(spec)
                return [{"id": 1}]

        presets = StaticRows()
        assert await presets.find_all("users") == [{"id": 1}]
        assert presets.specs[0]["table"] == "users"
