"""
API Module

FastAPI application, routers and request-scoped dependencies.

Package Structure:
==================
    api/
    ├── main.py           ← Application factory and lifespan
    ├── routes.py         ← Router registration under /api
    ├── dependencies/     ← Session, auth, pagination, uploads, services
    ├── handlers/         ← One router per resource
    └── middleware/       ← Error envelopes, request logging

Usage:
======
    uvicorn fitshare.api.main:app --reload

    # Tests build their own app around in-memory handles
    app = create_application(database=db, cache=cache, storage=storage)
"""
