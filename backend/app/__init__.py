"""
News Archive API — Application Package
========================================

What: Backend for a single news-article resource with an archive lifecycle.
Who:  Imported by uvicorn (``app.main:app``), pytest, and the route modules.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Repositories (Store Access)     │  ← lifecycle guards, queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Pydantic documents + API contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Motor client and collection
    └─────────────────────────────────────┘

    Article lifecycle:  active ──archive──▶ archived ──delete──▶ (gone)
"""

__version__ = "1.0.0"
