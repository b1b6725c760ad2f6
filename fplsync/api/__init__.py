from .batch import BatchOutcome, partition, run_batched
from .client import FplClient

__all__ = ["BatchOutcome", "FplClient", "partition", "run_batched"]
