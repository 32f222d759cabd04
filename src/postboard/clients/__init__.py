"""Clients for external services."""

from .store import StoreClient, StoreConfig, load_store_config

__all__ = ["StoreClient", "StoreConfig", "load_store_config"]
