from mcpkit.shared.diagnostics import ValidationIssue, ValidationResult
from mcpkit.shared.errors import (
    ArgumentValidationError,
    CodecError,
    DecodingError,
    NotFoundError,
    SchemaDefinitionError,
)


class TestErrors:
    def test_codec_errors_keep_their_message(self):
        # Act
        error = DecodingError("Malformed JSON")

        # Assert
        assert isinstance(error, CodecError)
        assert isinstance(error, ValueError)
        assert error.message == "Malformed JSON"
        assert str(error) == "Malformed JSON"

    def test_schema_definition_error_without_path(self):
        # Act
        error = SchemaDefinitionError("", "invalid type definition")

        # Assert
        assert str(error) == "invalid type definition"

    def test_not_found_renders_kind_subject_and_message(self):
        # Act
        error = NotFoundError("sum", "Tool not found")

        # Assert
        assert isinstance(error, KeyError)
        assert str(error) == "[NotFoundError] sum: Tool not found"

    def test_argument_validation_error_describes_the_first_issue(self):
        # Arrange
        result = ValidationResult(
            [
                ValidationIssue.type_mismatch("items[1].id", "int"),
                ValidationIssue.missing_parameter("items[1].label"),
            ]
        )

        # Act
        error = ArgumentValidationError(result)

        # Assert
        assert error.path == "items[1].id"
        assert error.message == "Must be Int"
        assert error.result is result
        assert str(error) == "[ValidationError] items[1].id: Must be Int"
