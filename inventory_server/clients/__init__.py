"""Compute Engine client wrapper module."""

from .compute_client import ComputeAPIError, ComputeClient, load_credentials

__all__ = ["ComputeClient", "ComputeAPIError", "load_credentials"]
