"""HTTP API: FastAPI application, routers and exception handlers."""
