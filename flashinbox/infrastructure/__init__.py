"""Infrastructure layer: persistence, HTTP adapters and FastAPI routers."""
