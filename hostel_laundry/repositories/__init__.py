from hostel_laundry.repositories.base import BaseRepository, Filter, FilterOperator, Sort
from hostel_laundry.repositories.data_store import DataStore, FixtureDataStore, SQLAlchemyDataStore

__all__ = [
    "BaseRepository",
    "DataStore",
    "Filter",
    "FilterOperator",
    "FixtureDataStore",
    "SQLAlchemyDataStore",
    "Sort",
]
