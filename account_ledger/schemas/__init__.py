"""Pydantic schemas for engine results and the HTTP API."""
