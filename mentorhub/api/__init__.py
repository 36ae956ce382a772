"""HTTP adapter exposing the workflows as a FastAPI application."""
