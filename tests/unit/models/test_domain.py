"""
Tests for domain models: SessionRecord and CookieScope.
"""

from datetime import timezone

import pytest
from pydantic import ValidationError

from session_facade.models.domain import CookieScope, SessionRecord


class TestSessionRecord:
    def test_defaults(self) -> None:
        record = SessionRecord(id="abc")

        assert record.values == {}
        assert record.created_at.tzinfo == timezone.utc
        assert record.updated_at.tzinfo == timezone.utc

    def test_requires_non_empty_id(self) -> None:
        with pytest.raises(ValidationError):
            SessionRecord(id="")

    def test_json_preserves_values(self) -> None:
        record = SessionRecord(
            id="abc",
            values={"SessionFacade::user_id": 42, "prefs::theme": "dark"},
        )

        restored = SessionRecord.model_validate_json(record.model_dump_json())

        assert restored.values == record.values
        assert restored.created_at == record.created_at

    def test_values_default_not_shared(self) -> None:
        first = SessionRecord(id="a")
        second = SessionRecord(id="b")

        first.values["k"] = 1

        assert second.values == {}


class TestCookieScope:
    def test_defaults(self) -> None:
        scope = CookieScope()

        assert scope.lifetime_seconds == 0
        assert scope.path == "/"
        assert scope.domain is None

    def test_is_immutable(self) -> None:
        scope = CookieScope(domain=".example.com")

        with pytest.raises(ValidationError):
            scope.domain = ".other.com"

    def test_rejects_negative_lifetime(self) -> None:
        with pytest.raises(ValidationError):
            CookieScope(lifetime_seconds=-5)
