"""Unit tests for row/domain mappers."""

from uuid import uuid4

from enroll.domain.model import IdentityRecord
from enroll.domain.value import OAuthProvider, RegistrationMethod
from enroll.persistence.mappers import identity_record_to_dict, row_to_identity_record

from tests.conftest import utc


class TestIdentityMappers:
    """Tests for identity record mapping."""

    def test_oauth_record_to_dict_uses_enum_values(self):
        record = IdentityRecord.for_oauth(
            email="sam@gmail.com",
            first_name="Sam",
            last_name="Lee",
            provider=OAuthProvider.GOOGLE,
            provider_id="g-1",
            oauth_token_encrypted="blob",
        )

        data = identity_record_to_dict(record)

        assert data["registration_method"] == "oauth"
        assert data["oauth_provider"] == "google"
        assert data["user_id"] == record.user_id

    def test_email_record_round_trips_through_row(self):
        record = IdentityRecord.for_email(
            email="Jo@Example.com",
            password_hash="$2b$04$hash",
            first_name="Jo",
            last_name="Do",
            verification_token_hash="c" * 64,
            now=utc(2026, 5, 1),
        ).mark_verified(now=utc(2026, 5, 2))

        data = identity_record_to_dict(record)

        assert data["oauth_provider"] is None
        assert row_to_identity_record(data) == record

    def test_row_with_string_uuid(self):
        user_id = uuid4()
        row = {
            "user_id": str(user_id),
            "email": "a@b.com",
            "email_normalized": "a@b.com",
            "password_hash": None,
            "first_name": "",
            "last_name": "",
            "registration_method": "oauth",
            "oauth_provider": "amazon",
            "oauth_provider_id": "amzn1.account.X",
            "oauth_token_encrypted": None,
            "email_verified": True,
            "verification_token_hash": None,
            "created_at": utc(2026, 5, 1),
            "updated_at": utc(2026, 5, 1),
        }

        record = row_to_identity_record(row)

        assert record.user_id == user_id
        assert record.registration_method == RegistrationMethod.OAUTH
        assert record.oauth_provider == OAuthProvider.AMAZON
        assert record.consumed_token_hash is None
