"""
Employee API — Application Package
===================================

What: JSON CRUD service for employee records backed by one relational table.
Who:  Imported by uvicorn (`employee_api.main:app`), pytest, and the console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes + Middleware (HTTP)      │  ← status codes, headers, JSON format
    ├─────────────────────────────────────┤
    │      Gateway (Persistence)          │  ← the only code issuing SQL
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy table + Pydantic wire models
    ├─────────────────────────────────────┤
    │      Database (Engine / Pool)       │  ← async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
