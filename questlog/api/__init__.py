"""HTTP layer: routers, auth dependencies and exception handlers."""
