from .batch import BatchResult, BatchValidator, Entry

__all__ = ["BatchResult", "BatchValidator", "Entry"]
