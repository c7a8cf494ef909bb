"""
API Routes - HTTP endpoint handlers

Routes receive HTTP requests, validate them, call services,
and return HTTP responses.

Structure: each area (timer, config, export, system) gets its own router,
all included in the main FastAPI app under /api/v1.
"""
