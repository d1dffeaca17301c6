"""Kernel value types – public re-export surface.

Modules:
  api_type.py – ApiType
"""

from extcall.kernel.types.api_type import ApiType

__all__ = ["ApiType"]
