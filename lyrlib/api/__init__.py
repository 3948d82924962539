"""HTTP API layer — FastAPI router, schemas, and middleware."""
