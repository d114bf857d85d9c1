"""
Noteful Backend: Validator & Sanitizer Unit Tests
=================================================

What:  Tests for the pure input checks and the response escaper.
"""

import pytest

from app.exceptions import ValidationError
from app.services.sanitizer import escape_markup
from app.services.validators import (
    get_folder_validation_error,
    get_note_validation_error,
    require_fields,
)


class TestEscapeMarkup:
    """Tests for escape_markup."""

    def test_script_tag_is_neutralized(self):
        escaped = escape_markup('Inject <script>alert("xss");</script>')

        assert escaped == 'Inject &lt;script&gt;alert("xss");&lt;/script&gt;'
        assert "<script>" not in escaped

    def test_plain_text_is_unchanged(self):
        assert escape_markup("Groceries & errands, 'urgent'") == "Groceries & errands, 'urgent'"

    def test_none_passes_through(self):
        assert escape_markup(None) is None

    def test_escaping_twice_is_stable(self):
        once = escape_markup("<b>bold</b>")
        assert escape_markup(once) == once


class TestFolderValidation:
    """Tests for get_folder_validation_error."""

    def test_absent_name_is_fine(self):
        assert get_folder_validation_error(None) is None

    def test_non_empty_name_is_fine(self):
        assert get_folder_validation_error("Important") is None

    def test_empty_name_is_rejected(self):
        assert get_folder_validation_error("") == "Folder name can't be empty"


class TestNoteValidation:
    def test_empty_note_name_is_rejected(self):
        assert get_note_validation_error("") == "Note name can't be empty"

    def test_note_name_is_fine(self):
        assert get_note_validation_error("Dogs") is None


class TestRequireFields:
    """Tests for require_fields."""

    def test_all_present(self):
        require_fields({"name": "N", "folderId": 1, "content": "C"}, ("name", "folderId", "content"))

    @pytest.mark.parametrize("missing", ["name", "folderId", "content"])
    def test_missing_field_is_named(self, missing):
        payload = {"name": "N", "folderId": 1, "content": "C"}
        payload[missing] = None

        with pytest.raises(ValidationError) as exc_info:
            require_fields(payload, ("name", "folderId", "content"))

        assert exc_info.value.message == f"Missing '{missing}' in request body"
        assert exc_info.value.field == missing

    def test_first_missing_field_wins(self):
        with pytest.raises(ValidationError) as exc_info:
            require_fields({}, ("name", "folderId", "content"))

        assert exc_info.value.message == "Missing 'name' in request body"

    def test_empty_string_counts_as_present(self):
        # Emptiness is the validators' concern, not a missing field
        require_fields({"name": ""}, ("name",))
