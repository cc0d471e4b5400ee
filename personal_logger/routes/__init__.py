# Routes package init
"""
Personal Logger — API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - entries.py:    POST /api/entries   (save an entry)
                     GET  /api/entries   (most recent entries)
    - templates.py:  GET  /api/templates (quick-entry phrases)
    - health.py:     GET  /health        (service health check)

Routes stay thin: extract request data, call the StorageEngine, shape the
response. Entry rules live in services/.
"""
