from pathlib import Path
from types import SimpleNamespace

import pytest
from openpyxl import Workbook

from pickup_planner.data import customers_repository
from pickup_planner.data.customers_repository import clear_customer_cache, load_customers, set_active_customer_file


@pytest.fixture(autouse=True)
def isolated_roster(monkeypatch):
    monkeypatch.setattr(customers_repository, "get_supabase_client", lambda: None)
    clear_customer_cache()
    yield
    clear_customer_cache()


def _write_csv(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_load_customers_from_csv_skips_non_customers(tmp_path: Path):
    path = _write_csv(
        tmp_path / "users.csv",
        "id,username,email,address,role\n"
        "1,alice,alice@example.com,\"10 Pine St, Philadelphia\",customer\n"
        "2,dave,dave@example.com,,driver\n"
        "3,bob,bob@example.com,,customer\n"
        "4,root,admin@example.com,1 Admin Way,admin\n"
        "5,carol,carol@example.com,22 Elm St,\n",
    )

    customers = load_customers(path)

    assert [c.id for c in customers] == [1, 3, 5]
    alice = customers[0]
    assert alice.username == "alice"
    assert alice.email == "alice@example.com"
    assert alice.address == "10 Pine St, Philadelphia"
    assert alice.role == "customer"
    assert customers[1].address is None


def test_load_customers_matches_headers_case_insensitively(tmp_path: Path):
    path = _write_csv(
        tmp_path / "users.csv",
        "ID,Username,Email,Address\n7,erin,erin@example.com,5 Oak Rd\n",
    )

    (customer,) = load_customers(path)

    assert customer.id == 7
    assert customer.address == "5 Oak Rd"


def test_load_customers_from_xlsx(tmp_path: Path):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["id", "username", "email", "address", "role"])
    sheet.append([11, "frank", "frank@example.com", "8 Walnut St", "customer"])
    sheet.append([12, "gina", "gina@example.com", "9 Walnut St", "driver"])
    sheet.append([None, None, None, None, None])
    path = tmp_path / "users.xlsx"
    workbook.save(path)

    customers = load_customers(path)

    assert [(c.id, c.address) for c in customers] == [(11, "8 Walnut St")]


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_customers(tmp_path / "missing.csv")


def test_bad_id_raises_value_error(tmp_path: Path):
    path = _write_csv(tmp_path / "users.csv", "id,username,email,address\nabc,x,x@example.com,1 Main St\n")
    with pytest.raises(ValueError):
        load_customers(path)


def test_unsupported_extension_raises(tmp_path: Path):
    path = _write_csv(tmp_path / "users.txt", "id\n1\n")
    with pytest.raises(ValueError):
        load_customers(path)


def test_set_active_customer_file_switches_default_source(tmp_path: Path, monkeypatch):
    first = _write_csv(tmp_path / "a.csv", "id,username,email,address\n1,a,a@example.com,1 A St\n")
    second = _write_csv(tmp_path / "b.csv", "id,username,email,address\n2,b,b@example.com,2 B St\n")
    monkeypatch.setattr(customers_repository.settings, "customer_file", first)

    assert [c.id for c in load_customers()] == [1]

    set_active_customer_file(second)

    assert [c.id for c in load_customers()] == [2]


class FakeSupabase:
    """Minimal stand-in for the Supabase query builder over an in-memory table."""

    def __init__(self, rows):
        self.rows = rows
        self.filters = []

    def table(self, name):
        assert name == "users"
        return self

    def select(self, columns):
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def execute(self):
        return SimpleNamespace(data=[dict(row) for row in self.rows])


def _db_row(cid, address, role="customer"):
    return {"id": cid, "username": f"user{cid}", "email": f"user{cid}@example.com", "address": address, "role": role}


def test_database_rows_take_precedence(tmp_path: Path, monkeypatch):
    client = FakeSupabase([_db_row(21, "3 Vine St")])
    monkeypatch.setattr(customers_repository, "get_supabase_client", lambda: client)
    monkeypatch.setattr(customers_repository.settings, "customer_file", tmp_path / "unused.csv")

    (customer,) = load_customers()

    assert customer.id == 21
    assert customer.address == "3 Vine St"


def test_supabase_client_is_none_without_credentials(monkeypatch):
    from pickup_planner.db import supabase as supabase_db

    monkeypatch.setattr(supabase_db.settings, "supabase_url", None)
    monkeypatch.setattr(supabase_db.settings, "supabase_key", None)
    supabase_db.get_supabase_client.cache_clear()
    try:
        assert supabase_db.supabase_configured() is False
        assert supabase_db.get_supabase_client() is None
    finally:
        supabase_db.get_supabase_client.cache_clear()


def test_database_roster_is_read_on_every_call(tmp_path: Path, monkeypatch):
    client = FakeSupabase([_db_row(1, "1 Arch St")])
    monkeypatch.setattr(customers_repository, "get_supabase_client", lambda: client)
    monkeypatch.setattr(customers_repository.settings, "customer_file", tmp_path / "unused.csv")

    assert [c.id for c in load_customers()] == [1]

    client.rows.append(_db_row(2, "2 Race St"))

    assert [c.id for c in load_customers()] == [1, 2]


def test_database_rows_with_null_role_count_as_customers(tmp_path: Path, monkeypatch):
    client = FakeSupabase(
        [
            _db_row(1, "1 Arch St", role=None),
            _db_row(2, "2 Race St", role="driver"),
            _db_row(3, "3 Vine St", role="Customer"),
            _db_row(4, "4 Elm St", role="admin"),
        ]
    )
    monkeypatch.setattr(customers_repository, "get_supabase_client", lambda: client)
    monkeypatch.setattr(customers_repository.settings, "customer_file", tmp_path / "unused.csv")

    assert [c.id for c in load_customers()] == [1, 3]
    assert client.filters == []


def test_roster_file_is_cached_per_path(tmp_path: Path):
    path = _write_csv(tmp_path / "users.csv", "id,username,email,address\n1,a,a@example.com,1 A St\n")

    first = load_customers(path)
    _write_csv(path, "id,username,email,address\n2,b,b@example.com,2 B St\n")

    assert load_customers(path) is first
    clear_customer_cache()
    assert [c.id for c in load_customers(path)] == [2]
