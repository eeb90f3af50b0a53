"""
MVC Blog - Middleware Package
=============================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs, error envelopes and error pages
    2. Logging:    one access line per request, tagged with that ID
"""
