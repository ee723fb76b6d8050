# Middleware package init
"""
Employee API — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [JSON Format] → Route Handler

    1. Request ID: correlation id for log lines and the X-Request-ID header
    2. Logging: one access-log line per request, including routing misses
    3. JSON Format: requests that do not speak JSON never reach a route
"""
