"""Unit tests for input forms and the error hierarchy."""
import pytest

from portfolio.application.forms import (
    AlbumForm,
    ImageForm,
    ProfileForm,
    UploadGrantRequest,
    invalid_input_message,
    parse_form,
)
from portfolio.errors import (
    ValidationFailed,
    NotFoundOrUnauthorized,
    UnknownPersistenceError,
    ConstraintViolation,
    StorageProviderError,
    Unauthenticated,
)


class TestProfileForm:

    def test_username_trimmed_and_lowercased(self):
        form = parse_form(ProfileForm, {"display_name": "Ana", "username": " AnaLima2 "}, "profile")

        assert form.username == "analima2"
        assert form.bio is None

    @pytest.mark.parametrize("username", ["a", "ana lima", "ana-lima", "ana_lima", "x" * 51])
    def test_bad_usernames(self, username):
        with pytest.raises(ValidationFailed) as exc_info:
            parse_form(ProfileForm, {"display_name": "Ana", "username": username}, "profile")

        assert [r["field"] for r in exc_info.value.reasons] == ["username"]

    def test_boundaries(self):
        parse_form(ProfileForm, {"display_name": "An", "username": "ab", "bio": "x" * 150}, "profile")
        parse_form(ProfileForm, {"display_name": "x" * 50, "username": "a" * 50}, "profile")


class TestAlbumForm:

    def test_optional_fields(self):
        form = parse_form(AlbumForm, {"title": "Summer"}, "album")

        assert form.description is None
        assert form.album_order is None
        assert form.image_url is None

    def test_description_limit(self):
        with pytest.raises(ValidationFailed):
            parse_form(AlbumForm, {"title": "Summer", "description": "x" * 151}, "album")


class TestImageForm:

    def test_all_fields_required(self):
        with pytest.raises(ValidationFailed) as exc_info:
            parse_form(ImageForm, {}, "image")

        assert {r["field"] for r in exc_info.value.reasons} == {
            "image_url", "alt_text", "caption", "image_order"
        }

    def test_image_order_coerced(self):
        form = parse_form(
            ImageForm,
            {"image_url": "https://b/x.png", "alt_text": "alt", "caption": "cap", "image_order": "3"},
            "image",
        )

        assert form.image_order == 3


class TestUploadGrantRequest:

    @pytest.mark.parametrize("content_type", ["image/jpeg", "IMAGE/PNG", "image/webp"])
    def test_image_types_allowed(self, content_type):
        form = parse_form(UploadGrantRequest, {"file_name": "a", "content_type": content_type}, "image")

        assert form.content_type == content_type.lower()

    @pytest.mark.parametrize("content_type", ["text/html", "application/pdf", ""])
    def test_other_types_rejected(self, content_type):
        with pytest.raises(ValidationFailed):
            parse_form(UploadGrantRequest, {"file_name": "a", "content_type": content_type}, "image")


def test_parse_form_passes_instances_through():
    form = AlbumForm(title="Summer")

    assert parse_form(AlbumForm, form, "album") is form


def test_parse_form_none_payload():
    with pytest.raises(ValidationFailed) as exc_info:
        parse_form(AlbumForm, None, "album")

    assert exc_info.value.message == invalid_input_message("album")


class TestErrors:

    @pytest.mark.parametrize("error_cls,kind,status", [
        (ValidationFailed, "validation_failed", 422),
        (Unauthenticated, "unauthenticated", 401),
        (NotFoundOrUnauthorized, "not_found_or_unauthorized", 404),
        (StorageProviderError, "storage_provider_error", 502),
        (UnknownPersistenceError, "unknown_persistence_error", 500),
        (ConstraintViolation, "constraint_violation", 409),
    ])
    def test_kinds_and_statuses(self, error_cls, kind, status):
        error = error_cls("boom")

        assert error.kind == kind
        assert error.status_code == status
        assert error.to_response() == {"detail": "boom", "kind": kind}

    def test_with_context_prefixes_message(self):
        error = NotFoundOrUnauthorized("Album not found.").with_context("update album")

        assert isinstance(error, NotFoundOrUnauthorized)
        assert str(error) == "Failed to update album: Album not found."
        assert error.status_code == 404

    def test_with_context_keeps_reasons(self):
        reasons = [{"field": "title", "message": "too short"}]
        error = ValidationFailed("bad", reasons=reasons).with_context("create album")

        assert error.reasons == reasons
        assert error.message == "Failed to create album: bad"
