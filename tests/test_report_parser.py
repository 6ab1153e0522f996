# tests/test_report_parser.py
"""
Report Parser Tests - Unit Tests for Sales Report Parsing

This module contains unit tests for turning Apple's daily sales summary
into per-app installs and USD revenue.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- appsales.application.report_parser (parse_sales_report and helpers)
- appsales.domain (ProductTypeClass, ReportFormatError)
- pytest (testing framework)
"""
import logging

import pytest  # Testing framework for writing and running tests

from appsales.application.report_parser import (
    classify_product_type,
    parse_sales_report,
    split_report_text,
)
from appsales.domain import ProductTypeClass, ReportFormatError

HEADER = [
    "Provider", "Provider Country", "SKU", "Developer", "Title", "Version",
    "Product Type Identifier", "Units", "Developer Proceeds", "Begin Date",
    "End Date", "Customer Currency", "Country Code", "Currency of Proceeds",
    "Apple Identifier", "Customer Price",
]

RATES = {"USD": 1.0, "EUR": 0.5, "JPY": 150.0}


def make_row(app_id, title, ptype, units, proceeds, currency="USD", country="US", header=HEADER):
    values = {
        "Provider": "APPLE",
        "Provider Country": "US",
        "SKU": f"sku-{app_id}",
        "Developer": "Example Dev",
        "Title": title,
        "Version": "1.0",
        "Product Type Identifier": ptype,
        "Units": units,
        "Developer Proceeds": proceeds,
        "Begin Date": "10/14/2026",
        "End Date": "10/14/2026",
        "Customer Currency": currency,
        "Country Code": country,
        "Currency of Proceeds": currency,
        "Apple Identifier": app_id,
        "Customer Price": "0.99",
    }
    return [values[name] for name in header]


class TestParseSalesReport:
    def test_empty_report(self):
        assert parse_sales_report([], RATES) == {}

    def test_header_only(self):
        assert parse_sales_report([HEADER], RATES) == {}

    def test_installs_and_revenue(self):
        rows = [
            HEADER,
            make_row("100", "Puzzle", "1", "10", "0.70"),
            make_row("100", "Puzzle", "IA1", "2", "2.10", currency="EUR", country="DE"),
            make_row("200", "Notes", "1F", "5", "0"),
        ]

        apps = parse_sales_report(rows, RATES)

        assert set(apps) == {"100", "200"}
        assert apps["100"].installs == 10
        # 10 * 0.70 USD + 2 * 2.10 EUR / 0.5
        assert apps["100"].revenue == pytest.approx(15.4)
        assert apps["200"].installs == 5
        assert apps["200"].revenue == 0

    def test_in_app_purchases_do_not_count_as_installs(self):
        rows = [HEADER, make_row("100", "Puzzle", "IAY", "3", "1.00")]
        apps = parse_sales_report(rows, RATES)
        assert apps["100"].installs == 0
        assert apps["100"].revenue == pytest.approx(3.0)

    def test_other_product_types_are_ignored(self):
        rows = [HEADER, make_row("100", "Puzzle", "7", "40", "0")]
        apps = parse_sales_report(rows, RATES)
        assert apps["100"].installs == 0
        assert apps["100"].revenue == 0

    def test_currency_conversion_divides_by_rate(self):
        rows = [HEADER, make_row("100", "Puzzle", "1", "1", "300", currency="JPY", country="JP")]
        apps = parse_sales_report(rows, RATES)
        assert apps["100"].revenue == pytest.approx(2.0)

    def test_unknown_currency_is_skipped(self, caplog):
        rows = [
            HEADER,
            make_row("100", "Puzzle", "1", "4", "0.70", currency="XXX"),
            make_row("100", "Puzzle", "1", "1", "0.70"),
        ]

        with caplog.at_level(logging.WARNING):
            apps = parse_sales_report(rows, RATES)

        assert apps["100"].installs == 1
        assert apps["100"].revenue == pytest.approx(0.7)
        assert "Unrecognized proceeds" in caplog.text

    def test_unknown_currency_still_creates_app(self):
        rows = [HEADER, make_row("300", "Maps", "1", "4", "0.70", currency="XXX")]
        apps = parse_sales_report(rows, RATES)
        assert apps["300"].installs == 0
        assert apps["300"].revenue == 0
        assert apps["300"].title == "Maps"

    def test_unparseable_numbers_count_as_zero(self):
        rows = [
            HEADER,
            make_row("100", "Puzzle", "1", "n/a", "0.70"),
            make_row("100", "Puzzle", "1", "2", None),
        ]
        apps = parse_sales_report(rows, RATES)
        assert apps["100"].installs == 2
        assert apps["100"].revenue == 0

    def test_first_row_sets_title_and_country(self):
        rows = [
            HEADER,
            make_row("100", "Puzzle", "1", "1", "0", country="GB"),
            make_row("100", "Puzzle Renamed", "1", "1", "0", country="FR"),
        ]
        apps = parse_sales_report(rows, RATES)
        assert apps["100"].title == "Puzzle"
        assert apps["100"].country == "GB"
        assert apps["100"].icon is None

    def test_column_order_comes_from_header(self):
        header = list(reversed(HEADER))
        rows = [
            header,
            make_row("100", "Puzzle", "1", "3", "1.00", header=header),
        ]
        apps = parse_sales_report(rows, RATES)
        assert apps["100"].installs == 3
        assert apps["100"].revenue == pytest.approx(3.0)

    def test_missing_column_raises(self):
        header = [name for name in HEADER if name != "Currency of Proceeds"]
        rows = [header, ["x"] * len(header)]
        with pytest.raises(ReportFormatError, match="Currency of Proceeds"):
            parse_sales_report(rows, RATES)


class TestClassifyProductType:
    @pytest.mark.parametrize("code", ["1", "1F", "1T", "F1", "1E", "1EP", "1EU"])
    def test_install_codes(self, code):
        assert classify_product_type(code) is ProductTypeClass.INSTALL

    @pytest.mark.parametrize("code", ["IA1", "IA9", "IAY", "IAC", "FI1"])
    def test_in_app_codes(self, code):
        assert classify_product_type(code) is ProductTypeClass.IN_APP_PURCHASE

    @pytest.mark.parametrize("code", ["7", "7F", "", None])
    def test_other_codes(self, code):
        assert classify_product_type(code) is ProductTypeClass.OTHER


class TestSplitReportText:
    def test_split_trims_and_drops_blank_lines(self):
        text = "Title\tUnits \t\n\nPuzzle\t\t3\n"
        assert split_report_text(text) == [
            ["Title", "Units", None],
            ["Puzzle", None, "3"],
        ]

    def test_single_character_lines_are_dropped(self):
        assert split_report_text("a\n\r\nb\tc") == [["b", "c"]]
