"""
Stockage des assets precalcules (collections et tendances) en JSON.
"""

from hachi.adapters.storage.json_store import JsonAssetStore

__all__ = ["JsonAssetStore"]
