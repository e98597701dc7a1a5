"""Tests for login page queries."""

from hubix.auth.models.errors import ShapeError
from hubix.auth.primitives.forms import (
    find_single_form,
    find_single_named_input,
    parse_document,
)


class TestFindSingleForm:
    def test_returns_action_of_the_only_form(self):
        # Arrange
        doc = parse_document(
            '<form action="/x"><input name="oauth" value="abc"></form>'
        )

        # Act
        result = find_single_form(doc)

        # Assert
        assert result.is_success()
        assert result.value == "/x"

    def test_missing_form_is_a_shape_error(self):
        # Act
        result = find_single_form(parse_document("<p>Maintenance</p>"))

        # Assert
        assert result.is_error()
        assert isinstance(result.error, ShapeError)
        assert "found 0" in result.error.detail

    def test_multiple_forms_are_rejected(self):
        # Arrange
        doc = parse_document('<form action="/a"></form><form action="/b"></form>')

        # Act
        result = find_single_form(doc)

        # Assert
        assert isinstance(result.error, ShapeError)
        assert "found 2" in result.error.detail

    def test_form_without_action_is_rejected(self):
        result = find_single_form(parse_document('<form method="POST"></form>'))

        assert isinstance(result.error, ShapeError)


class TestFindSingleNamedInput:
    def test_returns_value_of_matching_input(self):
        # Arrange
        doc = parse_document(
            '<form action="/x">'
            '<input name="login" value="">'
            '<input type="hidden" name="oauth" value="abc">'
            "</form>"
        )

        # Act
        result = find_single_named_input(doc, "oauth")

        # Assert
        assert result.is_success()
        assert result.value == "abc"

    def test_missing_input_is_a_shape_error(self):
        doc = parse_document('<form action="/x"><input name="login"></form>')

        result = find_single_named_input(doc, "oauth")

        assert isinstance(result.error, ShapeError)

    def test_duplicate_inputs_are_rejected(self):
        doc = parse_document(
            '<input name="oauth" value="a"><input name="oauth" value="b">'
        )

        result = find_single_named_input(doc, "oauth")

        assert result.is_error()

    def test_input_without_value_is_rejected(self):
        doc = parse_document('<input type="hidden" name="oauth">')

        result = find_single_named_input(doc, "oauth")

        assert isinstance(result.error, ShapeError)
        assert "value" in result.error.detail
