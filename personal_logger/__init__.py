"""
Personal Logger — Application Package Initializer
==================================================

What: Quick-capture logging of issues, tasks and notes, stored locally.
How:  The package is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Storage Engine, Query)  │  ← validation, append, recency
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database & Migrations (Store)   │  ← async SQLite + Alembic
    └─────────────────────────────────────┘

The storage engine is usable on its own (no HTTP required):

    storage = StorageEngine("sqlite+aiosqlite:///./data/PersonalLogger.db")
    await storage.initialize()
    await storage.append(EntryCreate(type="issue", content="Spill in aisle 3"))
    recent = await storage.list_recent(10)
"""

__version__ = "1.0.0"
