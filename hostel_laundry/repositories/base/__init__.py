from hostel_laundry.repositories.base.base_repository import BaseRepository, as_filters, as_sorts
from hostel_laundry.repositories.base.filtering import Filter, FilterOperator, Sort

__all__ = ["BaseRepository", "Filter", "FilterOperator", "Sort", "as_filters", "as_sorts"]
