"""Boundary DTOs (pydantic models)."""

from .adapter_params import AdapterParams

__all__ = ["AdapterParams"]
