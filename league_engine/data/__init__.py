"""Data loading, storage and generation utilities."""

from league_engine.data.loader import LeagueDataLoader, LoadError, StaticLoader
from league_engine.data.sample_data import generate_sample_league
from league_engine.data.storage import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "LeagueDataLoader",
    "LoadError",
    "StaticLoader",
    "generate_sample_league",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
