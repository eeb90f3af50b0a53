"""
MVC Blog - Application Package Initializer
==========================================

What: Marks the `mvcblog` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn mvcblog.main:app`), Alembic and pytest.

Architecture Note:
    The package is a small Model-View-Controller blog:

    ┌─────────────────────────────────────┐
    │   Routes (Controller: HTML + API)   │  ← verb + path → operation
    ├─────────────────────────────────────┤
    │   Templates (View)                  │  ← Jinja2, category selection
    ├─────────────────────────────────────┤
    │   Services (Business Logic)         │  ← validation, not-found rules
    ├─────────────────────────────────────┤
    │   Models & Schemas (Model)          │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes decide *which* template or status code to answer with; services
    decide *whether* an operation is allowed. Neither touches the other's job.
"""

__version__ = "1.0.0"
