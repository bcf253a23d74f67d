# Middleware package init
"""
Postboard: Middleware Package
=============================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: sets the correlation ID used by every later log line
    2. Logging: one access line per request, tagged with that ID
    3. CORS: FastAPI's CORSMiddleware (handles preflight)

The per-id check on /api/posts/{post_id} is not middleware; it is a router
dependency (postboard.routes.dependencies.check_object_id).
"""
