# Services package init
"""
Personal Logger — Services Layer
=================================

What:  Entry lifecycle logic between the routes (HTTP) and the database.
How:   Services accept schema objects, apply the entry rules, and return
       response schemas. Routes reach them through app.state.storage.

Service Inventory:
    - storage_engine.py:   StorageEngine (initialize, append, list_recent)
    - entry_validation.py: type check, content trim, timestamp stamping
    - recency.py:          newest-first query and limit normalization
    - templates.py:        quick-entry phrases per entry type
"""
