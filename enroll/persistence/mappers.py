"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from enroll.domain.model import IdentityRecord
from enroll.domain.value import OAuthProvider, RegistrationMethod, UserId


def row_to_identity_record(row: Dict[str, Any]) -> IdentityRecord:
    """Convert database row to IdentityRecord domain model.

    Args:
        row: Database row as dict

    Returns:
        IdentityRecord domain model
    """
    provider = row.get("oauth_provider")
    return IdentityRecord(
        user_id=UserId(
            UUID(row["user_id"]) if isinstance(row["user_id"], str) else row["user_id"]
        ),
        email=row["email"],
        email_normalized=row["email_normalized"],
        password_hash=row.get("password_hash"),
        first_name=row["first_name"],
        last_name=row["last_name"],
        registration_method=RegistrationMethod(row["registration_method"]),
        oauth_provider=OAuthProvider(provider) if provider else None,
        oauth_provider_id=row.get("oauth_provider_id"),
        oauth_token_encrypted=row.get("oauth_token_encrypted"),
        email_verified=row["email_verified"],
        verification_token_hash=row.get("verification_token_hash"),
        consumed_token_hash=row.get("consumed_token_hash"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def identity_record_to_dict(record: IdentityRecord) -> Dict[str, Any]:
    """Convert IdentityRecord domain model to database dict.

    Args:
        record: IdentityRecord domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = record.model_dump()
    data["registration_method"] = record.registration_method.value
    data["oauth_provider"] = (
        record.oauth_provider.value if record.oauth_provider else None
    )
    return data
