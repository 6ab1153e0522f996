# src/appsales/adapters/formatting/formatter.py
"""
Message Formatter - Sales Summary Presentation

This module builds the daily summary message: one "Totals" section followed
by one section per app (sorted by title, at most MAX_APP_SECTIONS), each
showing downloads, revenue and the change against the previous day and the
same day last week. It also renders that message as plain text for
channels without rich formatting.

Files that USE this module:
- appsales.application.run_coordinator (build_sales_message)
- appsales.adapters.telegram.notifier (render_plain_text)
- tests.test_formatter (unit tests)

Files that this module USES:
- appsales.domain.models (SalesSnapshot, DisplayMessage and section types)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping

from appsales.domain.models import (
    ZERO_SALES,
    AppSalesRecord,
    DisplayMessage,
    MessageField,
    MessageSection,
    SalesSnapshot,
)

MAX_APP_SECTIONS = 20
COLOR_GOOD = "good"
COLOR_BAD = "danger"


def format_report_date(day: date) -> str:
    """Format a date like 'October 15, 2026'."""
    return f"{day:%B} {day.day}, {day.year}"


def format_number(value: int) -> str:
    """Format an integer with thousands separators, e.g. 12,345."""
    return f"{int(value):,}"


def format_percent(value: float) -> str:
    """
    Format a ratio as a signed percentage.

    Args:
        value: Ratio where 1.0 means 100%

    Returns:
        String like '+12.5%', '-50.0%' or '+1,200.0%'
    """
    plus = "+" if value >= 0 else ""
    return f"{plus}{value * 100:,.1f}%"


def _pct_change(curr: float, prev: float) -> float:
    """
    Relative change from prev to curr.

    A zero baseline counts as +100% so new sales never divide by zero.
    """
    if not prev:
        return 1.0
    return (curr - prev) / abs(prev)


def format_percents_field(curr: float, prev_day: float, prev_week: float) -> str:
    """Format day-over-day and week-over-week change, e.g. '+5.0% day / -2.1% week'."""
    day_pct = format_percent(_pct_change(curr, prev_day))
    week_pct = format_percent(_pct_change(curr, prev_week))
    return f"{day_pct} day / {week_pct} week"


def format_currency(value: float) -> str:
    """
    Format a USD amount.

    Amounts of $100 or more are shown without cents.

    Returns:
        String like '$1,234', '$42.50' or '-$5.20'
    """
    minus = "-" if value < 0 else ""
    decimals = 0 if abs(value) >= 100 else 2
    return f"{minus}${abs(value):,.{decimals}f}"


@dataclass
class _Totals:
    day: float = 0
    prev_day: float = 0
    prev_week: float = 0


def _is_good(installs: int, revenue: float, prev_installs: int, prev_revenue: float) -> bool:
    """
    Decide whether a day is colored good or bad.

    Revenue is compared when there is any; installs otherwise.
    """
    if revenue != 0:
        return revenue > prev_revenue
    return installs > prev_installs


def create_fields(
    installs: int,
    revenue: float,
    prev_day_installs: int,
    prev_day_revenue: float,
    prev_week_installs: int,
    prev_week_revenue: float,
) -> tuple[MessageField, ...]:
    """
    Build the field list for a section.

    Revenue and its change line are left out when there is no revenue today.
    """
    has_revenue = revenue != 0
    fields = [MessageField(title="Downloads", value=format_number(installs))]

    if has_revenue:
        fields.append(MessageField(title="Revenue", value=format_currency(revenue)))

    fields.append(MessageField(value=format_percents_field(installs, prev_day_installs, prev_week_installs)))

    if has_revenue:
        fields.append(MessageField(value=format_percents_field(revenue, prev_day_revenue, prev_week_revenue)))

    return tuple(fields)


def _sorted_app_ids(day: Mapping[str, AppSalesRecord]) -> list[str]:
    # Case-insensitive title order; the raw title and the id break ties deterministically
    return sorted(day, key=lambda app_id: (day[app_id].title.casefold(), day[app_id].title, app_id))


def build_sales_message(sales: SalesSnapshot, report_date: date) -> DisplayMessage:
    """
    Build the daily summary message for a sales snapshot.

    Args:
        sales: Parsed sales for the report date and comparison dates
        report_date: The date being reported

    Returns:
        A one-line message when there were no sales, otherwise a Totals
        section followed by up to MAX_APP_SECTIONS per-app sections
    """
    date_str = format_report_date(report_date)

    if not sales.day:
        return DisplayMessage(text=f"No app sales on {date_str}")

    installs = _Totals()
    revenue = _Totals()
    sections: list[MessageSection] = []

    for app_id in _sorted_app_ids(sales.day):
        app = sales.day[app_id]
        prev_day_app = sales.prev_day.get(app_id, ZERO_SALES)
        prev_week_app = sales.prev_week.get(app_id, ZERO_SALES)

        installs.day += app.installs
        installs.prev_day += prev_day_app.installs
        installs.prev_week += prev_week_app.installs

        revenue.day += app.revenue
        revenue.prev_day += prev_day_app.revenue
        revenue.prev_week += prev_week_app.revenue

        good = _is_good(app.installs, app.revenue, prev_day_app.installs, prev_day_app.revenue)
        sections.append(MessageSection(
            color=COLOR_GOOD if good else COLOR_BAD,
            author_name=app.title,
            author_icon=app.icon,
            fields=create_fields(
                app.installs,
                app.revenue,
                prev_day_app.installs,
                prev_day_app.revenue,
                prev_week_app.installs,
                prev_week_app.revenue,
            ),
        ))

    sections = sections[:MAX_APP_SECTIONS]

    total_good = _is_good(installs.day, revenue.day, installs.prev_day, revenue.prev_day)
    text = f"Daily Analytics for {date_str}"
    totals = MessageSection(
        color=COLOR_GOOD if total_good else COLOR_BAD,
        fallback=text,
        pretext=text,
        title="Totals",
        fields=create_fields(
            installs.day,
            revenue.day,
            installs.prev_day,
            revenue.prev_day,
            installs.prev_week,
            revenue.prev_week,
        ),
    )

    return DisplayMessage(sections=(totals, *sections))


def render_plain_text(message: DisplayMessage) -> str:
    """
    Render a DisplayMessage as plain text.

    Each section becomes a heading line marked 📈 (good) or 📉 (bad)
    followed by its fields, one per line.
    """
    if not message.sections:
        return message.text or ""

    lines = []
    if message.text:
        lines.append(message.text)

    for section in message.sections:
        if section.pretext:
            lines.append(section.pretext)
            lines.append("")
        arrow = "📈" if section.color == COLOR_GOOD else "📉"
        heading = section.title or section.author_name or ""
        lines.append(f"{arrow} {heading}")
        for f in section.fields:
            lines.append(f"{f.title}: {f.value}" if f.title else f"  {f.value}")
        lines.append("")

    return "\n".join(lines).rstrip()
