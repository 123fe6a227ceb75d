"""
data_engine — Remote store access and the client-side sync layer.

Public API
----------
    from data_engine import DataCoordinator, QueryCache, SupabaseGateway
"""

from data_engine.coordinator import DataCoordinator
from data_engine.gateway import RemoteDataGateway
from data_engine.mutations import MutationCoordinator, MutationKind
from data_engine.query_cache import CacheEntry, CacheStatus, QueryCache
from data_engine.supabase_gateway import SupabaseGateway

__all__ = [
    "CacheEntry",
    "CacheStatus",
    "DataCoordinator",
    "MutationCoordinator",
    "MutationKind",
    "QueryCache",
    "RemoteDataGateway",
    "SupabaseGateway",
]
