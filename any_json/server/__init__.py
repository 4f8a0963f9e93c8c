"""HTTP conversion service: FastAPI app and its pydantic models."""
