"""Test content type collection and classification."""

from routeforge.codegen.models import ContentKind
from routeforge.codegen.processors.content import (
    collect_content_types,
    get_content_kind,
)


class TestCollectContentTypes:
    """Tests for collect_content_types."""

    def test_extra_types_first_then_body_types(self):
        """Test that explicit types come first and duplicates are dropped."""
        bodies = [
            {'content': {'application/json': {}, 'application/xml': {}}},
            {'content': {'application/json': {}}},
        ]

        result = collect_content_types(bodies, ['text/plain', 'application/json'])

        assert result == ['text/plain', 'application/json', 'application/xml']

    def test_empty_and_missing_values_are_dropped(self):
        """Test that None/empty entries and body-less inputs are ignored."""
        result = collect_content_types([None, {}, {'content': None}], [None, '', 'text/csv'])

        assert result == ['text/csv']


class TestGetContentKind:
    """Tests for get_content_kind."""

    def test_json_wins_over_form_data(self):
        """Test that a +json vendor type makes the set JSON."""
        kind = get_content_kind(['application/x-custom+json', 'multipart/form-data'])

        assert kind is ContentKind.JSON

    def test_plain_json(self):
        """Test application/json."""
        assert get_content_kind(['application/json']) is ContentKind.JSON

    def test_url_encoded_before_form_data(self):
        """Test the precedence of URL-encoded over multipart."""
        kind = get_content_kind(
            ['multipart/form-data', 'application/x-www-form-urlencoded']
        )

        assert kind is ContentKind.URL_ENCODED

    def test_form_data(self):
        """Test multipart/form-data."""
        assert get_content_kind(['multipart/form-data']) is ContentKind.FORM_DATA

    def test_image(self):
        """Test image types."""
        assert get_content_kind(['image/png', 'text/plain']) is ContentKind.IMAGE

    def test_other(self):
        """Test that anything else, or nothing, is OTHER."""
        assert get_content_kind(['text/plain']) is ContentKind.OTHER
        assert get_content_kind([]) is ContentKind.OTHER
