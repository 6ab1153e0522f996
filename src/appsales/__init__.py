# src/appsales/__init__.py
"""
AppSales - Daily App Store Sales Reporter

Fetches the daily Apple App Store sales summary, converts proceeds to USD,
compares the day against the previous day and the same day last week, and
posts the result to a Slack or Telegram channel.
"""

__version__ = "1.0.0"
