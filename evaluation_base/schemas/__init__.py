"""Schemas — pydantic models for the request body and the two envelope shapes."""
