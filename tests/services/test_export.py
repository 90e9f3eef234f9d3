import io
from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest
from openpyxl import load_workbook

from app.services import export


def make_asset(**overrides):
    values = dict(
        id=1,
        name="Toyota Motor",
        symbol="7203",
        quantity=100.0,
        acquisition_price=2000.0,
        current_price=2500.0,
        acquisition_date=datetime(2023, 4, 1, tzinfo=timezone.utc),
        currency="JPY",
        notes=None,
        category_id="stocks",
        category=SimpleNamespace(name="Stocks", color="#3B82F6"),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class TestCsv:
    def test_header_only_for_empty_list(self):
        text = export.build_csv([])
        assert text == "\ufeff" + ",".join(f'"{h}"' for h in export.CSV_HEADERS) + "\n"

    def test_row_values(self):
        text = export.build_csv([make_asset(notes="line one")])
        row = text.lstrip("\ufeff").split("\n")[1]
        assert row == '"Toyota Motor","Stocks","7203",100.0,2000.0,2500.0,"2023-04-01","JPY",250000.0,200000.0,50000.0,25.0,"line one"'

    def test_money_is_rounded(self):
        text = export.build_csv([make_asset(quantity=1, acquisition_price=1, current_price=1.23456)])
        row = text.split("\n")[1]
        assert ",1.23," in row
        assert ",0.23," in row


class TestExcel:
    def test_column_width_bounds(self):
        assert export.column_width(2) == 10
        assert export.column_width(20) == pytest.approx(24)
        assert export.column_width(100) == 50

    def test_workbook_contents(self):
        content = export.build_excel([make_asset(), make_asset(id=2, name="Bitcoin", category_id="crypto",
                                                              category=SimpleNamespace(name="Crypto", color="#F97316"))])
        workbook = load_workbook(io.BytesIO(content))
        assert workbook.sheetnames == ["Assets", "Category Summary", "Portfolio Summary"]
        assert workbook["Assets"].max_row == 3
        assert workbook["Category Summary"].max_row == 3
        summary = {row[0]: row[1] for row in workbook["Portfolio Summary"].iter_rows(min_row=2, values_only=True)}
        assert summary["Total Value"] == 500000
        assert summary["Asset Count"] == 2


class TestPdf:
    def test_pdf_bytes(self):
        content = export.build_pdf([make_asset(name="A & B <Holdings>")], owner_name="Taro")
        assert content.startswith(b"%PDF")

    def test_empty_portfolio(self):
        assert export.build_pdf([]).startswith(b"%PDF")


def test_export_filename():
    assert export.export_filename("csv", today=date(2024, 5, 6)) == "assets-2024-05-06.csv"
