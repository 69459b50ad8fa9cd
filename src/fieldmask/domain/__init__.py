"""Domain layer — the field mask value type and its enums.

This layer depends only on stdlib and pydantic.
It must never import from services or config.
"""
