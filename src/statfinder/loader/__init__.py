from statfinder.loader.base import DatasetLoader
from statfinder.loader.json_file import JsonFileLoader
from statfinder.loader.supabase import SupabaseLoader

__all__ = [
    "DatasetLoader",
    "JsonFileLoader",
    "SupabaseLoader",
]
