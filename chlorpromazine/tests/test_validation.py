from chlorpromazine.core.types import ErrorKind, Failure
from chlorpromazine.mcp.prompts import SoberThinkingArgs
from chlorpromazine.mcp.tools.kill_trip import KillTripInput
from chlorpromazine.mcp.tools.sober_thinking import SoberThinkingInput
from chlorpromazine.mcp.validation import validate_arguments


def test_valid_arguments_are_projected_onto_the_model():
    result = validate_arguments(KillTripInput, {"query": "asyncio gather"})

    assert isinstance(result, KillTripInput)
    assert result.query == "asyncio gather"


def test_unknown_fields_are_ignored():
    result = validate_arguments(KillTripInput, {"query": "pydantic", "page": 2})

    assert isinstance(result, KillTripInput)
    assert not hasattr(result, "page")


def test_missing_required_field_is_invalid_input():
    result = validate_arguments(SoberThinkingArgs, {})

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.INVALID_INPUT
    assert "QUESTION_TEXT" in result.detail


def test_wrong_type_is_invalid_input():
    result = validate_arguments(KillTripInput, {"query": 42})

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.INVALID_INPUT
    assert result.detail.startswith("query:")


def test_length_bounds_are_enforced():
    empty = validate_arguments(KillTripInput, {"query": ""})
    too_long = validate_arguments(KillTripInput, {"query": "x" * 201})
    at_limit = validate_arguments(KillTripInput, {"query": "x" * 200})

    assert isinstance(empty, Failure)
    assert isinstance(too_long, Failure)
    assert isinstance(at_limit, KillTripInput)


def test_blank_query_is_rejected_and_padding_is_stripped():
    blank = validate_arguments(KillTripInput, {"query": "   \t"})
    padded = validate_arguments(KillTripInput, {"query": "  asyncio  "})

    assert isinstance(blank, Failure)
    assert blank.kind is ErrorKind.INVALID_INPUT
    assert blank.detail.startswith("query:")
    assert padded.query == "asyncio"


def test_none_is_an_empty_bag():
    assert isinstance(validate_arguments(SoberThinkingInput, None), SoberThinkingInput)


def test_non_object_payload_is_rejected():
    result = validate_arguments(SoberThinkingInput, ["query"])

    assert isinstance(result, Failure)
    assert result.detail.startswith("arguments:")
