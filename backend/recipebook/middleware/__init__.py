# Middleware package init
"""
RecipeBook Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID runs first so every log line of the request can carry it
    - Logging measures the full handler time and records the final status
    - CORS is FastAPI's CORSMiddleware (answers preflight requests)

Authentication is NOT middleware: only POST /add_recipe needs it, so it is a
route dependency (recipebook.dependencies.get_auth_context).
"""
