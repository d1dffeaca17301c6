"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    └── InfrastructureError  (infrastructure.py)
        └── DispatchError
            ├── TransportError
            ├── ResponseStatusError
            ├── DecodeError
            └── EncodeError
"""

from extcall.kernel.errors.application import ApplicationError
from extcall.kernel.errors.base import BaseError
from extcall.kernel.errors.infrastructure import (
    DecodeError,
    DispatchError,
    EncodeError,
    InfrastructureError,
    ResponseStatusError,
    TransportError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DecodeError",
    "DispatchError",
    "EncodeError",
    "InfrastructureError",
    "ResponseStatusError",
    "TransportError",
]
