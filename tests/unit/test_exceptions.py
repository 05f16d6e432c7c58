from listschema.exceptions import (
    DSLParseError,
    FormValidationError,
    InputTooLargeError,
    PackageError,
    SchemaEditError,
    SchemaParseError,
    SchemaValidationError,
    SettingsError,
)
from listschema.typing.models import FieldError, ParseIssue


def test_root_exception_hierarchy() -> None:
    for error_type in (
        SettingsError,
        DSLParseError,
        SchemaParseError,
        SchemaValidationError,
        FormValidationError,
        SchemaEditError,
        InputTooLargeError,
    ):
        assert issubclass(error_type, PackageError)


def test_dsl_parse_error_message_names_the_line() -> None:
    error = DSLParseError(reason="Unknown modifier 'x'", line_number=4, line="a: text x")

    assert str(error) == "Line 4: Unknown modifier 'x'"


def test_aggregate_errors_list_details() -> None:
    parse_error = SchemaParseError(issues=(ParseIssue(line=2, message="Bad line"),))
    validation_error = SchemaValidationError(errors=(FieldError(field="a", message="A is wrong"),))

    assert str(parse_error) == "Schema contains syntax errors: line 2: Bad line"
    assert str(validation_error) == "Schema is invalid: a: A is wrong"
    assert str(FormValidationError()) == "Form data is invalid"


def test_input_too_large_message() -> None:
    assert str(InputTooLargeError(size=20, limit=10)) == "Schema text is 20 bytes, limit is 10 bytes"
