# Middleware package init
"""
Personal Logger — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Security Headers] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Security Headers first: the https redirect happens before any work
    2. Request ID: correlation ID for logging and error bodies
    3. Logging: one access line per request, tagged with the request ID
    4. GZip / CORS: provided by Starlette

    Responses travel the chain in reverse, so every response (including
    errors and redirects from inner layers) gets the security headers.
"""
