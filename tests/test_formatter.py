# tests/test_formatter.py
"""
Formatter Tests - Unit Tests for the Daily Summary Message

This module contains unit tests for number, currency and percentage
formatting and for the sections built from a sales snapshot.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- appsales.adapters.formatting.formatter (formatter functions for testing)
- appsales.domain.models (AppSalesRecord, SalesSnapshot for test data)
- pytest (testing framework)
"""
from datetime import date

import pytest  # Testing framework for writing and running tests

from appsales.adapters.formatting.formatter import (
    MAX_APP_SECTIONS,
    build_sales_message,
    format_currency,
    format_number,
    format_percent,
    format_percents_field,
    format_report_date,
    render_plain_text,
)
from appsales.domain.models import AppSalesRecord, SalesSnapshot

REPORT_DATE = date(2026, 10, 15)


def app(title, installs=0, revenue=0.0, icon=None):
    return AppSalesRecord(title=title, country="US", installs=installs, revenue=revenue, icon=icon)


class TestFormatPercent:
    def test_zero_baseline_is_plus_100(self):
        assert format_percents_field(50, 0, 0) == "+100.0% day / +100.0% week"

    def test_decrease(self):
        assert format_percents_field(50, 100, 100) == "-50.0% day / -50.0% week"

    def test_increase(self):
        assert format_percents_field(150, 100, 50) == "+50.0% day / +200.0% week"

    def test_negative_baseline_uses_absolute_value(self):
        assert format_percents_field(10, -10, -10) == "+200.0% day / +200.0% week"

    def test_no_change_is_positive(self):
        assert format_percent(0) == "+0.0%"

    def test_thousands_separator(self):
        assert format_percent(12.5) == "+1,250.0%"


class TestFormatCurrency:
    def test_large_amount_has_no_cents(self):
        assert format_currency(1234.5) == "$1,234"

    def test_small_amount_has_cents(self):
        assert format_currency(42.5) == "$42.50"

    def test_negative_amount(self):
        assert format_currency(-5.2) == "-$5.20"

    def test_negative_large_amount(self):
        assert format_currency(-1500) == "-$1,500"

    def test_boundary(self):
        assert format_currency(99.999) == "$100.00"
        assert format_currency(100) == "$100"


class TestFormatNumber:
    def test_grouping(self):
        assert format_number(1234567) == "1,234,567"
        assert format_number(12) == "12"


class TestFormatReportDate:
    def test_format(self):
        assert format_report_date(date(2026, 3, 5)) == "March 5, 2026"


class TestBuildSalesMessage:
    def test_no_sales(self):
        msg = build_sales_message(SalesSnapshot(day={}), REPORT_DATE)

        assert msg.text == "No app sales on October 15, 2026"
        assert msg.sections == ()
        assert msg.to_slack_payload() == {"text": "No app sales on October 15, 2026"}

    def test_installs_only_app(self):
        sales = SalesSnapshot(
            day={"100": app("Puzzle", installs=100)},
            prev_day={"100": app("Puzzle", installs=80)},
        )

        msg = build_sales_message(sales, REPORT_DATE)

        totals, section = msg.sections
        assert section.color == "good"
        assert section.author_name == "Puzzle"
        assert [f.title for f in section.fields] == ["Downloads", None]
        assert section.fields[0].value == "100"
        # no prev week record: zero baseline
        assert section.fields[1].value == "+25.0% day / +100.0% week"
        assert all(f.short for f in section.fields)
        assert totals.title == "Totals"
        assert totals.pretext == "Daily Analytics for October 15, 2026"
        assert totals.fallback == "Daily Analytics for October 15, 2026"

    def test_revenue_takes_precedence(self):
        sales = SalesSnapshot(
            day={"100": app("Puzzle", installs=200, revenue=10.0)},
            prev_day={"100": app("Puzzle", installs=100, revenue=20.0)},
            prev_week={"100": app("Puzzle", installs=100, revenue=5.0)},
        )

        msg = build_sales_message(sales, REPORT_DATE)

        section = msg.sections[1]
        assert section.color == "danger"
        assert [(f.title, f.value) for f in section.fields] == [
            ("Downloads", "200"),
            ("Revenue", "$10.00"),
            (None, "+100.0% day / +100.0% week"),
            (None, "-50.0% day / +100.0% week"),
        ]

    def test_flat_installs_are_bad(self):
        sales = SalesSnapshot(
            day={"100": app("Puzzle", installs=5)},
            prev_day={"100": app("Puzzle", installs=5)},
        )
        assert build_sales_message(sales, REPORT_DATE).sections[1].color == "danger"

    def test_sorted_by_title(self):
        sales = SalesSnapshot(day={
            "1": app("zebra", installs=1),
            "2": app("Apple", installs=1),
            "3": app("mango", installs=1),
        })

        msg = build_sales_message(sales, REPORT_DATE)

        assert [s.author_name for s in msg.sections[1:]] == ["Apple", "mango", "zebra"]

    def test_totals(self):
        sales = SalesSnapshot(
            day={"1": app("A", installs=1000, revenue=150.0), "2": app("B", installs=500)},
            prev_day={"1": app("A", installs=750, revenue=100.0), "2": app("B", installs=250)},
            prev_week={"2": app("B", installs=1500)},
        )

        totals = build_sales_message(sales, REPORT_DATE).sections[0]

        assert totals.color == "good"
        assert [f.value for f in totals.fields] == [
            "1,500",
            "$150",
            "+50.0% day / +0.0% week",
            "+50.0% day / +100.0% week",
        ]

    def test_section_cap(self):
        day = {str(i): app(f"App {i:02d}", installs=i + 1) for i in range(25)}

        msg = build_sales_message(SalesSnapshot(day=day), REPORT_DATE)

        assert len(msg.sections) == MAX_APP_SECTIONS + 1
        assert msg.sections[-1].author_name == "App 19"
        # totals still include the dropped apps
        assert msg.sections[0].fields[0].value == format_number(sum(range(1, 26)))

    def test_icon_is_carried(self):
        sales = SalesSnapshot(day={"1": app("A", installs=1, icon="https://example.com/a.png")})
        section = build_sales_message(sales, REPORT_DATE).sections[1]
        assert section.author_icon == "https://example.com/a.png"

    def test_deterministic(self):
        sales = SalesSnapshot(
            day={"1": app("Same", installs=3), "2": app("Same", installs=4), "3": app("same", installs=5)},
        )
        first = build_sales_message(sales, REPORT_DATE).to_slack_payload()
        second = build_sales_message(sales, REPORT_DATE).to_slack_payload()
        assert first == second

    def test_slack_payload(self):
        sales = SalesSnapshot(day={"1": app("A", installs=1, icon="https://example.com/a.png")})

        payload = build_sales_message(sales, REPORT_DATE).to_slack_payload()

        totals, section = payload["attachments"]
        assert totals["title"] == "Totals"
        assert totals["pretext"] == "Daily Analytics for October 15, 2026"
        assert section == {
            "fallback": "",
            "color": "good",
            "author_name": "A",
            "author_icon": "https://example.com/a.png",
            "fields": [
                {"title": "Downloads", "value": "1", "short": True},
                {"value": "+100.0% day / +100.0% week", "short": True},
            ],
        }


class TestRenderPlainText:
    def test_no_sales(self):
        msg = build_sales_message(SalesSnapshot(day={}), REPORT_DATE)
        assert render_plain_text(msg) == "No app sales on October 15, 2026"

    def test_sections(self):
        sales = SalesSnapshot(day={"1": app("Puzzle", installs=3, revenue=2.5)})

        text = render_plain_text(build_sales_message(sales, REPORT_DATE))

        assert text.startswith("Daily Analytics for October 15, 2026")
        assert "📈 Totals" in text
        assert "📈 Puzzle" in text
        assert "Revenue: $2.50" in text
