"""
Base class for Supabase-backed repositories.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Holds the Supabase client for a table-backed repository.

    Subclasses own their table name, their queries and the mapping from
    row dicts to the model type T (see modules.users.repository).
    """

    def __init__(self, db: Client) -> None:
        self._db = db
