# Middleware package init
"""
MemoPad Backend — Middleware Package
======================================

Middleware Chain (request direction):
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route

    Request ID runs first so the rate limiter and the access log can both
    read the current ID. The rate limiter only inspects /api/summarize.
"""
