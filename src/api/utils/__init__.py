"""API helpers: the orjson-backed default response class."""
