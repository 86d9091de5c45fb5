"""Tests for the exception hierarchy."""

from cms.core.exceptions import (
    CmsException,
    ConflictError,
    DuplicateResourceError,
    DuplicateSlugError,
    EntryNotFoundError,
    InvalidStatusTransitionError,
    NotFoundError,
    UniqueConstraintViolationError,
    UpdateRaceLostError,
    ValidationError,
)


class TestErrorPayloads:
    def test_entry_not_found(self):
        exc = EntryNotFoundError("abc-123")

        assert isinstance(exc, NotFoundError)
        assert exc.entry_id == "abc-123"
        assert exc.to_dict() == {
            "error": {
                "code": "NOT_FOUND",
                "message": "Entry with id 'abc-123' not found",
                "details": {},
            }
        }

    def test_duplicate_slug(self):
        exc = DuplicateSlugError("blog", "hello-world")

        assert isinstance(exc, DuplicateResourceError)
        assert exc.status_code == 409
        assert exc.error_code == "DUPLICATE_SLUG"
        assert exc.details == {"collection": "blog", "slug": "hello-world"}

    def test_conflict_kinds_are_distinguishable(self):
        unique = UniqueConstraintViolationError("blog", "hello-world")
        race = UpdateRaceLostError("abc-123")

        assert isinstance(unique, ConflictError)
        assert isinstance(race, ConflictError)
        assert not isinstance(unique, DuplicateSlugError)
        assert unique.error_code == "UNIQUE_CONSTRAINT_VIOLATION"
        assert race.error_code == "UPDATE_RACE_LOST"

    def test_invalid_transition_is_validation_error(self):
        exc = InvalidStatusTransitionError("draft", "archived")

        assert isinstance(exc, ValidationError)
        assert exc.status_code == 400
        assert exc.details == {"current": "draft", "requested": "archived"}

    def test_base_defaults(self):
        exc = CmsException("boom")

        assert exc.status_code == 500
        assert exc.error_code == "INTERNAL_ERROR"
        assert str(exc) == "boom"
