"""Customer roster loader with database-first approach, falling back to a CSV/XLSX export."""

from __future__ import annotations

import csv
import functools
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from openpyxl import load_workbook

from ..config import settings
from ..db.supabase import get_supabase_client, select_rows
from ..models.domain import Customer

CUSTOMER_ROLE = "customer"


def _field(row: Mapping[str, Any], *names: str) -> Any:
    lowered = {str(key).strip().lower(): value for key, value in row.items() if key is not None}
    for name in names:
        value = lowered.get(name)
        if value is not None and value != "":
            return value
    return None


def _coerce_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Unable to parse customer id from value '{value}'")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to parse customer id from value '{value}'") from exc


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _row_to_customer(row: Mapping[str, Any]) -> Optional[Customer]:
    raw_id = _field(row, "id", "customer_id", "customerid")
    if raw_id is None:
        return None
    role = _text(_field(row, "role")).lower() or CUSTOMER_ROLE
    address = _field(row, "address")
    return Customer(
        id=_coerce_id(raw_id),
        username=_text(_field(row, "username", "user_name", "name")),
        email=_text(_field(row, "email")),
        address=None if address is None else str(address),
        role=role,
        raw=dict(row),
    )


def _customers_from_rows(rows: Iterable[Mapping[str, Any]]) -> tuple[Customer, ...]:
    customers: list[Customer] = []
    for row in rows:
        customer = _row_to_customer(row)
        if customer is None or customer.role != CUSTOMER_ROLE:
            continue
        customers.append(customer)
    return tuple(customers)


def _read_csv_rows(path: Path) -> list[dict[str, Any]]:
    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Customer file '{path}' is missing a header row.")
        return list(reader)


def _read_xlsx_rows(path: Path) -> list[dict[str, Any]]:
    workbook = load_workbook(filename=path, read_only=True, data_only=True)
    try:
        worksheet = workbook.active
        header_row = next(worksheet.iter_rows(values_only=True), None)
        if not header_row:
            raise ValueError(f"Customer file '{path}' is missing a header row.")
        headers = [str(cell) if cell is not None else "" for cell in header_row]
        rows = []
        for row_values in worksheet.iter_rows(values_only=True, min_row=2):
            if all(cell is None for cell in row_values):
                continue
            rows.append({headers[i]: cell for i, cell in enumerate(row_values) if i < len(headers)})
        return rows
    finally:
        workbook.close()


@functools.lru_cache(maxsize=4)
def _load_customers_from_file(path: Path) -> tuple[Customer, ...]:
    if not path.exists():
        raise FileNotFoundError(f"Customer file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        rows = _read_csv_rows(path)
    elif suffix in {".xlsx", ".xlsm"}:
        rows = _read_xlsx_rows(path)
    else:
        raise ValueError(f"Unsupported customer file type '{path.suffix}'. Use CSV or XLSX.")

    customers = _customers_from_rows(rows)
    logging.info(f"Loaded {len(customers)} customers from {path.name}")
    return customers


def _load_customers_from_database() -> tuple[Customer, ...] | None:
    """Load customers from Supabase. Returns None if the database is not available."""
    supabase = get_supabase_client()
    if not supabase:
        return None

    # No role filter in the query: rows with a NULL role are customers too.
    try:
        rows = select_rows(supabase, settings.customers_table, "id,username,email,address,role")
    except Exception as e:
        logging.warning(f"Customer query failed, falling back to file: {e}")
        return None

    customers = _customers_from_rows(rows)
    logging.info(f"Loaded {len(customers)} customers from table '{settings.customers_table}'")
    return customers


def load_customers(source: Optional[Path] = None) -> tuple[Customer, ...]:
    """Load the customer roster. An explicit ``source`` file bypasses the database.

    The database is queried on every call; roster files are cached per path.
    """

    if source is None:
        customers = _load_customers_from_database()
        if customers is not None:
            return customers
    return _load_customers_from_file(source or settings.customer_file)


def set_active_customer_file(path: Path) -> None:
    """Update the active customer roster and clear related caches."""

    settings.customer_file = path
    clear_customer_cache()


def clear_customer_cache() -> None:
    _load_customers_from_file.cache_clear()
