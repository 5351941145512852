"""HTTP retrieval of registry documents."""

from .http import HttpClient, HttpxClient, compute_delay

__all__ = ["HttpClient", "HttpxClient", "compute_delay"]
