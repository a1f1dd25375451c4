"""Order intake service: stores submitted orders in Baserow and pings Telegram."""

__version__ = "1.0.0"
