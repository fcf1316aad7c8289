"""PostgreSQL repository implementations."""

from enroll.persistence.repository.identity import PostgresIdentityRepository

__all__ = ["PostgresIdentityRepository"]
