"""
Tests for the module-level API and its default client.
"""

import pytest

import sql_assembler as sa
from sql_assembler import api
from sql_assembler.client import QueryClient
from sql_assembler.io import Database


@pytest.fixture
def default_client(client):
    api.set_client(client)
    yield client
    api.set_client(None)


def test_get_client_is_created_lazily_and_reused(settings, monkeypatch):
    monkeypatch.setattr("sql_assembler.io.connection.get_settings", lambda: settings)
    api.set_client(None)
    try:
        first = api.get_client()
        assert isinstance(first, QueryClient)
        assert api.get_client() is first
    finally:
        api.set_client(None)


@pytest.mark.asyncio
async def test_find_delegates_to_default_client(default_client, executor):
    executor.result = [{"id": 1}]

    rows = await sa.find({"table": "users", "where": {"id": 1}})

    assert rows == [{"id": 1}]
    assert executor.last_sql == "SELECT * FROM `users` WHERE `id` = ?"


@pytest.mark.asyncio
async def test_mutations_delegate(default_client, executor):
    await sa.insert("users", {"name": "Ana"})
    await sa.update({"table": "users", "set": {"name": "Bea"}, "where": {"id": 1}})
    await sa.delete_records({"table": "users", "where": {"id": 1}})
    await sa.create_table("users", {"id": "INT"})
    await sa.raw_query("SELECT 1")

    assert [sql for sql, _ in executor.calls] == [
        "INSERT INTO `users` (`name`) VALUES (?)",
        "UPDATE `users` SET `name` = ? WHERE `id` = ?",
        "DELETE FROM `users` WHERE `id` = ?",
        "CREATE TABLE IF NOT EXISTS `users` (`id` INT)",
        "SELECT 1",
    ]


@pytest.mark.asyncio
async def test_presets_delegate(default_client, executor):
    await sa.find_by_where("users", {"a": 1})
    await sa.find_group_by_or("orders", ["user_id"], where={"a": 1, "b": 2})
    await sa.find_with_order_desc_by_or("posts", order_by="id")

    assert [sql for sql, _ in executor.calls] == [
        "SELECT * FROM `users` WHERE `a` = ?",
        "SELECT * FROM `orders` WHERE `a` = ? OR `b` = ? GROUP BY `user_id`",
        "SELECT * FROM `posts` ORDER BY `id` DESC",
    ]


@pytest.mark.asyncio
async def test_disconnect_without_connection(settings):
    api.set_client(QueryClient(Database(settings=settings)))
    try:
        await sa.disconnect()
        assert not api.get_client().database.is_connected
    finally:
        api.set_client(None)
