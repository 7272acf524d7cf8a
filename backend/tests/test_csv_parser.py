"""Tests for CSV statement parsing."""

import pytest
from datetime import date
from decimal import Decimal

from subscout.parsers.csv_parser import CSVParser


@pytest.fixture
def parser():
    return CSVParser()


@pytest.fixture
def write_csv(tmp_path):
    def _write(text, name="statement.csv"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


class TestDetectMapping:
    """Test header auto-detection"""

    def test_single_amount_column(self, parser):
        mapping = parser.detect_mapping(["Transaction Date", "Description", "Amount", "Category"])

        assert mapping["date_col"] == 0
        assert mapping["description_col"] == 1
        assert mapping["amount_col"] == 2
        assert mapping["category_col"] == 3
        assert mapping["merchant_col"] is None

    def test_debit_credit_columns(self, parser):
        mapping = parser.detect_mapping(["Posted Date", "Payee", "Debit", "Credit"])

        assert mapping["amount_col"] is None
        assert mapping["debit_col"] == 2
        assert mapping["credit_col"] == 3

    def test_missing_date(self, parser):
        with pytest.raises(ValueError):
            parser.detect_mapping(["Description", "Amount"])

    def test_missing_amount(self, parser):
        with pytest.raises(ValueError):
            parser.detect_mapping(["Date", "Description", "Debit"])


class TestParse:
    """Test row parsing"""

    def test_expenses_become_positive(self, parser, write_csv):
        path = write_csv(
            "Date,Description,Amount,Merchant\n"
            "04/01/2024,NETFLIX.COM 866-579,-15.99,Netflix\n"
            "04/02/2024,ACME PAYROLL,2500.00,\n"
        )

        rows = parser.parse(path)

        assert len(rows) == 2
        assert rows[0]["date"] == date(2024, 4, 1)
        assert rows[0]["amount"] == Decimal("15.99")
        assert rows[0]["raw_description"] == "NETFLIX.COM 866-579"
        assert rows[0]["merchant_name"] == "Netflix"
        assert rows[1]["amount"] == Decimal("-2500.00")
        assert rows[1]["merchant_name"] is None

    def test_debit_and_credit(self, parser, write_csv):
        path = write_csv(
            "Posted Date,Payee,Debit,Credit\n"
            "04/02/2024,CITY GYM,40.00,\n"
            "04/03/2024,STORE REFUND,,12.50\n"
        )

        rows = parser.parse(path)

        assert [r["amount"] for r in rows] == [Decimal("40.00"), Decimal("-12.50")]

    def test_currency_formatting(self, parser, write_csv):
        path = write_csv(
            'Date,Description,Amount\n'
            '04/01/2024,ADOBE,"($1,299.00)"\n'
        )

        rows = parser.parse(path)

        assert rows[0]["amount"] == Decimal("1299.00")

    def test_bad_rows_skipped(self, parser, write_csv):
        path = write_csv(
            "Date,Description,Amount\n"
            "not a date,SPOTIFY,-9.99\n"
            "04/01/2024,SPOTIFY,-9.99\n"
            "\n"
            "04/02/2024\n"
        )

        rows = parser.parse(path)

        assert len(rows) == 1
        assert rows[0]["raw_description"] == "SPOTIFY"

    def test_custom_date_format(self, parser, write_csv):
        path = write_csv(
            "Date,Description,Amount\n"
            "2024-04-01,SPOTIFY,-9.99\n"
        )

        rows = parser.parse(path, date_format="%Y-%m-%d")

        assert rows[0]["date"] == date(2024, 4, 1)
