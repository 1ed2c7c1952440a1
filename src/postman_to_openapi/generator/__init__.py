"""OpenAPI document generation."""
