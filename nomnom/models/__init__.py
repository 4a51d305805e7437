"""Pydantic domain models and API schemas."""
