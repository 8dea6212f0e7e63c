# =============================================================================
# tests/test_utils.py - Utility Tests
# =============================================================================
# Unit tests for lib/utils.py.
#
# Run with: pytest tests/test_utils.py -v
# =============================================================================

from datetime import timezone

from bson import ObjectId

from lib.utils import serialize_document, slugify, to_object_id, utcnow


class TestToObjectId:
    """Tests for to_object_id."""

    def test_valid_hex(self):
        """Test parsing a 24 character hex string."""
        assert to_object_id("5d713995b721c3bb38c1f5d0") == ObjectId("5d713995b721c3bb38c1f5d0")

    def test_passthrough(self):
        """Test that ObjectIds are returned unchanged."""
        oid = ObjectId()
        assert to_object_id(oid) is oid

    def test_invalid(self):
        """Test that malformed ids give None instead of raising."""
        assert to_object_id("not-an-id") is None
        assert to_object_id("") is None
        assert to_object_id(None) is None


class TestSerializeDocument:
    """Tests for serialize_document."""

    def test_nested_document(self):
        """Test _id renaming and ObjectId conversion at every level."""
        camp, course, user = ObjectId(), ObjectId(), ObjectId()
        doc = {
            "_id": camp,
            "user": user,
            "courses": [{"_id": course, "bootcamp": camp}],
            "location": {"coordinates": [-71.1, 42.3]},
        }

        assert serialize_document(doc) == {
            "id": str(camp),
            "user": str(user),
            "courses": [{"id": str(course), "bootcamp": str(camp)}],
            "location": {"coordinates": [-71.1, 42.3]},
        }

    def test_scalars_unchanged(self):
        assert serialize_document(5) == 5
        assert serialize_document(None) is None


class TestSlugify:
    """Tests for slugify."""

    def test_spaces_and_case(self):
        assert slugify("Devworks Bootcamp") == "devworks-bootcamp"

    def test_punctuation_and_accents(self):
        """Test that punctuation is dropped and accents are folded."""
        assert slugify("Café & Code: Bootcamp!") == "cafe-code-bootcamp"

    def test_repeated_separators(self):
        assert slugify("  Dev -- Works  ") == "dev-works"


def test_utcnow_is_aware():
    """Test that timestamps carry UTC."""
    assert utcnow().tzinfo == timezone.utc
