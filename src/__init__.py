"""Taxmap - distributes a tax payment across spending categories.

Two flows are offered: a fixed-percentage split across government sectors,
stored per caller, and a split proportional to a published budget weight
table, formatted as currency.

Layers:
- **API**: FastAPI routes, middleware and exception handlers
- **Services**: the fixed, dynamic and history flows
- **Domain**: the allocation engine and the weight table
- **Infrastructure**: async SQLAlchemy persistence of tax records
- **Core**: configuration, logging, tracing, errors and tokens
"""
