import re

import pytest

from dbplayground.core.exceptions import ConstraintViolationError, DatabaseError
from dbplayground.infrastructure.db.introspection import COLUMN_NAMES_SQL, DESCRIBE_COLUMNS_SQL

pytestmark = pytest.mark.unit

COLUMN_LINE = re.compile(r'^\s+"(\w+)" (\w+)', re.MULTILINE)


def test_list_tables(client, fake_db):
    fake_db.on("GROUP BY table_name", [
        {"table_name": "users", "columns": [{"name": "id", "type": "integer"}, {"name": "name", "type": "character varying"}]},
    ])

    resp = client.get("/db/tables")

    assert resp.status_code == 200
    assert resp.json() == {
        "tables": [
            {"table_name": "users", "columns": [{"name": "id", "type": "integer"},
                                               {"name": "name", "type": "character varying"}]},
        ]
    }


def test_list_tables_failure(client, fake_db):
    fake_db.on("GROUP BY table_name", DatabaseError(details="connection reset"))

    resp = client.get("/db/tables")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch database tables"}


def test_get_table_data(client, fake_db):
    fake_db.on(DESCRIBE_COLUMNS_SQL, [
        {"column_name": "id", "data_type": "integer", "column_default": "nextval('users_id_seq'::regclass)", "is_nullable": "NO"},
    ]).on('SELECT * FROM "users"', [{"id": 1}])

    resp = client.get("/db/tables/users")

    assert resp.status_code == 200
    body = resp.json()
    assert body["data"] == [{"id": 1}]
    assert body["columns"][0]["column_default"] == "nextval('users_id_seq'::regclass)"


def test_get_missing_table_is_error_envelope(client, fake_db):
    fake_db.on("SELECT * FROM", DatabaseError(details='relation "ghosts" does not exist'))

    resp = client.get("/db/tables/ghosts")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch table data", "details": 'relation "ghosts" does not exist'}


def test_insert_row(client, fake_db):
    fake_db.on(COLUMN_NAMES_SQL, [{"column_name": "id"}, {"column_name": "name"}, {"column_name": "email"}])
    fake_db.on("INSERT INTO", lambda sql, params: [{"id": 1, "name": params["p1"], "email": None}])

    resp = client.post("/db/tables/users", json={"name": "Ada", "email": ""})

    assert resp.status_code == 200
    assert resp.json() == {"data": {"id": 1, "name": "Ada", "email": None}}
    assert '"email"' not in fake_db.statements("INSERT INTO")[0].sql


def test_insert_constraint_violation(client, fake_db):
    fake_db.on("INSERT INTO", ConstraintViolationError(details='null value in column "name" violates not-null constraint'))

    resp = client.post("/db/tables/users", json={"email": "a@example.com"})

    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Failed to insert data",
        "details": 'null value in column "name" violates not-null constraint',
    }


def test_insert_unknown_column_is_bad_request(client, fake_db):
    fake_db.on(COLUMN_NAMES_SQL, [{"column_name": "id"}, {"column_name": "name"}])

    resp = client.post("/db/tables/users", json={"name": "Ada", "password": "x"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "Unknown columns"


def test_update_row(client, fake_db):
    fake_db.on("UPDATE", [{"id": 5, "name": "Grace"}])

    resp = client.put("/db/tables/users", json={"id": 5, "data": {"id": 5, "name": "Grace"}})

    assert resp.status_code == 200
    assert resp.json() == {"data": {"id": 5, "name": "Grace"}}
    update = fake_db.statements("UPDATE")[0]
    assert update.params == {"p1": 5, "p2": "Grace"}


def test_update_missing_row(client, fake_db):
    fake_db.on("UPDATE", [])

    resp = client.put("/db/tables/users", json={"id": 999, "data": {"name": "Nobody"}})

    assert resp.status_code == 404
    assert resp.json() == {"error": "Record not found"}


def test_update_without_id(client, fake_db):
    resp = client.put("/db/tables/users", json={"data": {"name": "Nobody"}})

    assert resp.status_code == 404
    assert fake_db.statements("UPDATE") == []


def test_delete_row(client, fake_db):
    fake_db.on("DELETE FROM", [{"id": 3, "name": "Bob"}])

    resp = client.delete("/db/tables/users", params={"id": "3"})

    assert resp.status_code == 200
    assert resp.json() == {"data": {"id": 3, "name": "Bob"}}


def test_delete_requires_id(client, fake_db):
    resp = client.delete("/db/tables/users")

    assert resp.status_code == 400
    assert resp.json() == {"error": "ID is required"}
    assert fake_db.calls == []


def test_delete_missing_row(client, fake_db):
    fake_db.on("DELETE FROM", [])

    resp = client.delete("/db/tables/users", params={"id": "77"})

    assert resp.status_code == 404
    assert resp.json() == {"error": "Record not found"}


def test_create_table(client, fake_db):
    payload = {
        "tableName": "events",
        "columns": [
            {"name": "id", "type": "SERIAL", "isNullable": False, "isPrimaryKey": True,
             "isUnique": False, "hasDefault": False, "isForeignKey": False},
            {"name": "user_id", "type": "INTEGER", "isNullable": True, "isPrimaryKey": False,
             "isUnique": False, "hasDefault": False, "isForeignKey": True,
             "referenceTable": "users", "referenceColumn": "id", "onDelete": "CASCADE"},
        ],
    }

    resp = client.post("/db/tables/create", json=payload)

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Table created successfully"
    assert 'FOREIGN KEY ("user_id") REFERENCES "users"("id") ON DELETE CASCADE' in body["query"]
    executed = fake_db.statements("CREATE TABLE")
    assert len(executed) == 1 and executed[0].raw
    assert executed[0].sql == body["query"]


def test_create_table_engine_error(client, fake_db):
    fake_db.on("CREATE TABLE", DatabaseError(details='column "id" specified more than once'))

    resp = client.post("/db/tables/create", json={
        "tableName": "dupes",
        "columns": [{"name": "id", "type": "INTEGER"}, {"name": "id", "type": "TEXT"}],
    })

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to create table", "details": 'column "id" specified more than once'}


def test_create_table_rejects_unknown_on_delete(client, fake_db):
    resp = client.post("/db/tables/create", json={
        "tableName": "t",
        "columns": [{"name": "a", "type": "INTEGER", "isForeignKey": True, "onDelete": "EXPLODE"}],
    })

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"
    assert fake_db.calls == []


def test_delete_table(client, fake_db):
    resp = client.post("/db/tables/delete", json={"tableName": "old-users"})

    assert resp.status_code == 200
    assert resp.json() == {"message": "Table old-users deleted successfully"}
    assert fake_db.calls[0].sql == 'DROP TABLE IF EXISTS "oldusers" CASCADE;'


def test_created_table_is_listed(client, fake_db):
    catalog = {}

    def create(sql, params):
        table = re.search(r'CREATE TABLE IF NOT EXISTS "(\w+)"', sql).group(1)
        catalog.setdefault(table, [
            {"name": name, "type": "integer" if col_type == "SERIAL" else col_type.lower()}
            for name, col_type in COLUMN_LINE.findall(sql)
        ])
        return []

    def list_tables(sql, params):
        return [{"table_name": name, "columns": columns} for name, columns in catalog.items()]

    fake_db.on("CREATE TABLE", create).on("GROUP BY table_name", list_tables)

    client.post("/db/tables/create", json={
        "tableName": "notes",
        "columns": [
            {"name": "id", "type": "SERIAL", "isPrimaryKey": True},
            {"name": "body", "type": "TEXT"},
        ],
    })
    resp = client.get("/db/tables")

    tables = {table["table_name"]: table for table in resp.json()["tables"]}
    assert {column["name"] for column in tables["notes"]["columns"]} == {"id", "body"}
    assert {"name": "id", "type": "integer"} in tables["notes"]["columns"]


def test_get_table_with_binary_column(client, fake_db):
    fake_db.on(DESCRIBE_COLUMNS_SQL, [
        {"column_name": "secret", "data_type": "bytea", "column_default": None, "is_nullable": "YES"},
    ]).on('SELECT * FROM "keys"', [{"id": 1, "secret": b"\x9f\x00\xff"}])

    resp = client.get("/db/tables/keys")

    assert resp.status_code == 200
    assert resp.json()["data"] == [{"id": 1, "secret": "\\x9f00ff"}]


def test_insert_returning_binary_row(client, fake_db):
    fake_db.on("INSERT INTO", [{"id": 2, "secret": b"\xde\xad\xbe\xef"}])

    resp = client.post("/db/tables/keys", json={"secret": "\\xdeadbeef"})

    assert resp.status_code == 200
    assert resp.json() == {"data": {"id": 2, "secret": "\\xdeadbeef"}}


def test_insert_without_returned_row(client, fake_db):
    fake_db.on("INSERT INTO", [])

    resp = client.post("/db/tables/audit", json={"note": "ignored by rule"})

    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Failed to insert data",
        "details": "INSERT INTO audit RETURNING * produced no row",
    }
