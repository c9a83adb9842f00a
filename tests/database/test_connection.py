from __future__ import annotations

import pytest

from src.academy_attendance.academy_attendance.database import connection
from src.academy_attendance.academy_attendance.database.connection import DatabaseConnection, DBConfig


def test_config_from_settings_mapping():
    cfg = DBConfig.from_mapping({"host": "db", "user": "u", "password": "p", "database": "academy_db"})
    assert cfg == DBConfig(host="db", port=3306, user="u", password="p", database="academy_db")


def test_config_requires_database_name():
    with pytest.raises(KeyError):
        DBConfig.from_mapping({"host": "db", "user": "u", "password": "p"})


def test_each_connect_opens_a_new_transactional_connection(monkeypatch):
    calls = []

    def fake_connect(**kwargs):
        calls.append(kwargs)
        return object()

    monkeypatch.setattr(connection.mysql.connector, "connect", fake_connect)
    factory = DatabaseConnection(DBConfig("db", 3307, "u", "p", "academy_db"))

    first, second = factory.connect(), factory.connect()

    assert first is not second
    assert [c["autocommit"] for c in calls] == [False, False]
    assert calls[0]["port"] == 3307
    assert calls[0]["database"] == "academy_db"

