"""Unit tests for MySQLMessageRepository against a mocked connection provider."""
import pymysql
import pytest

from app.core.errors import StorageFailure
from app.repositories.message_repository import MySQLMessageRepository

ROW = {"message_id": 1, "posted_by": 1, "message_text": "hi", "time_posted_epoch": 1000}


def test_create_returns_message_with_generated_id(provider, cursor):
    cursor.lastrowid = 4
    repo = MySQLMessageRepository(provider)
    message = repo.create(1, "hi", 1000)
    assert message.message_id == 4
    assert message.time_posted_epoch == 1000
    assert cursor.execute.call_args.args[1] == (1, "hi", 1000)


def test_find_all_maps_rows(provider, cursor):
    cursor.fetchall.return_value = [ROW, {**ROW, "message_id": 2, "message_text": "yo"}]
    repo = MySQLMessageRepository(provider)
    messages = repo.find_all()
    assert [m.message_id for m in messages] == [1, 2]


def test_find_all_empty(provider, cursor):
    cursor.fetchall.return_value = ()
    assert MySQLMessageRepository(provider).find_all() == []


def test_find_by_id(provider, cursor):
    cursor.fetchall.return_value = [ROW]
    repo = MySQLMessageRepository(provider)
    assert repo.find_by_id(1).message_text == "hi"
    cursor.fetchall.return_value = []
    assert repo.find_by_id(2) is None


def test_delete_and_update_return_rowcount(provider, cursor):
    repo = MySQLMessageRepository(provider)
    cursor.rowcount = 1
    assert repo.delete_by_id(1) == 1
    assert cursor.execute.call_args.args[1] == (1,)
    cursor.rowcount = 0
    assert repo.update_text_by_id(1, "new") == 0
    sql, params = cursor.execute.call_args.args
    assert sql.startswith("UPDATE message SET message_text")
    assert params == ("new", 1)


def test_find_by_account_filters_on_posted_by(provider, cursor):
    cursor.fetchall.return_value = [ROW]
    repo = MySQLMessageRepository(provider)
    assert len(repo.find_by_account(1)) == 1
    sql, params = cursor.execute.call_args.args
    assert "WHERE posted_by = %s" in sql
    assert params == (1,)


def test_write_error_raises_storage_failure(provider, cursor):
    cursor.execute.side_effect = pymysql.err.IntegrityError(1452, "foreign key constraint fails")
    repo = MySQLMessageRepository(provider)
    with pytest.raises(StorageFailure):
        repo.create(99, "hi", 1000)


def test_read_error_raises_storage_failure(provider):
    provider.connection.side_effect = pymysql.err.OperationalError(2003, "Can't connect")
    with pytest.raises(StorageFailure):
        MySQLMessageRepository(provider).find_all()
