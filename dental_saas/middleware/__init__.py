# Middleware package init
"""
Dental SaaS Backend — Middleware Package
==========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (last added runs first, see main.create_app):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so the access log line and every error body of
      the request carry the same correlation ID.
    - Logging measures the full handler duration and the final status code,
      including responses produced by the global exception handlers.
"""
