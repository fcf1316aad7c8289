"""Identifier types for registration entities.

A NewType keeps an identity's UUID from being passed where some other
UUID is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
