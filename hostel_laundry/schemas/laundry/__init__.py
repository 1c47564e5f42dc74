from hostel_laundry.schemas.laundry.batch import BatchCreate, BatchResponse, BatchStats, BatchStatusUpdate

__all__ = ["BatchCreate", "BatchStatusUpdate", "BatchResponse", "BatchStats"]
