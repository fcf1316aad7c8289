"""Domain model entities for identity registration."""

from enroll.domain.model.identity_record import NAME_MAX_LENGTH, IdentityRecord

__all__ = ["IdentityRecord", "NAME_MAX_LENGTH"]
