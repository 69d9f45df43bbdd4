"""Pydantic and dataclass models for assets, options, placements and the HTTP API."""
