"""Provider call outcomes.

Provider clients report transport and API failures as ``OperationResult``
values; channels turn them into per-channel notification results.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
