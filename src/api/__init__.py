"""HTTP API layer built on FastAPI.

- **main**: application factory and lifespan (database check, schema
  bootstrap, weight table loading)
- **routes**: auth stubs, budget and tax distribution endpoints
- **dependencies**: settings, caller identity, weight table and service
  injection
- **middleware**: correlation IDs, request logging and exception handlers
- **schemas**: request, response and error envelope models
- **utils**: orjson-backed response class

Routes translate between HTTP and the distribution service; amounts stay
``Decimal`` until the response models are built.
"""
