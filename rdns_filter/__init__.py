"""Обратный резолвинг IP-адресов из CSV с фильтром по домену."""

__version__ = "0.1.0"
