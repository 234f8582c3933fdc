# Shared pytest fixtures
from __future__ import annotations
import logging
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from shipsheet.logging.init import LOGGER_NAME, reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("SHIPSHEET_MAPPING", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    yield
    reset_logging()
    # setup_logging() detaches the app logger from root; undo so caplog sees records
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def make_excel(path: Path, rows: list[list[object]], sheet_name: str = "Sheet1") -> Path:
    """Write rows (first row = header) to a single-sheet workbook."""
    df = pd.DataFrame(rows)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def orders_excel(temp_workdir: Path) -> Path:
    return make_excel(
        temp_workdir / "data" / "orders.xlsx",
        [
            ["Order", "Name", "Phone", "Province", "Street", "Product", "Spec", "Qty", "Note"],
            ["SO1", "Bob", 13900000002, "SH", "2 Road", "Gadget", "red", 1, ""],
            ["SO2", "Alice", 13800000001, "BJ", "1 Street", "Widget", "", 2, "gift"],
            ["SO3", "Alice", 13800000001, "BJ", "1 Street", "Widget", "", 3, ""],
            ["SO4", None, None, None, None, "Orphan", "", 1, ""],
            ["SO5", "Carol", 13700000003, "GZ", "3 Lane", "Widget", "", 1, ""],
            ["SO6", "Bob", 13900000002, "SH", "2 Road", "Cable", "1m", 4, "fast"],
        ],
    )


@pytest.fixture()
def sample_config_yaml() -> str:
    return """mappings:
  recipient_name: {columns: [B], operation: concat}
  recipient_phone: {columns: [2], operation: concat}
  delivery_address: {columns: [D, E], operation: concat}
  product_name: {columns: [F], operation: concat}
  product_spec: {columns: [G], operation: concat}
  quantity: {columns: [H], operation: add}
  remarks: {columns: [I], operation: concat}
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "mapping.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def excel_factory(temp_workdir: Path):
    def _make(name: str, rows: list[list[object]]) -> Path:
        return make_excel(temp_workdir / "data" / name, rows)
    return _make
