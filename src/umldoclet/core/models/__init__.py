"""Pydantic models for configuration and the documentable-element model."""
