"""
Assertions on decoded API payloads.

verify_response_body_value never raises on a bad payload: it returns
(is_valid, error_message) and leaves failing the test to the caller. Error
messages always embed the full payload, since a payload with an unexpected
shape is the usual cause.
"""
import json
from typing import Any, NamedTuple

COMPARISONS = ("equals", "contains", "defined")


class _Missing:
    def __repr__(self) -> str:
        return "undefined"


MISSING = _Missing()


class VerificationResult(NamedTuple):
    is_valid: bool
    error_message: str


def get_nested_value(obj: Any, path: str) -> Any:
    """
    Walk a dot-separated path ("oauth.access_token", "items.0.id").
    Returns MISSING as soon as a segment cannot be followed.
    """
    current = obj
    for key in path.split("."):
        if isinstance(current, dict):
            if key not in current:
                return MISSING
            current = current[key]
        elif isinstance(current, list) and key.isascii() and key.isdigit():
            index = int(key)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def dump_payload(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


def _strict_equals(actual: Any, expected: Any) -> bool:
    # bool is an int subclass; keep True from matching 1.
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    return actual == expected


def verify_response_body_value(
    response_body: Any,
    field_path: str,
    expected_value: Any = None,
    comparison: str = "contains",
) -> VerificationResult:
    if comparison not in COMPARISONS:
        raise ValueError(f"Unknown comparison {comparison!r}; expected one of {COMPARISONS}")

    field_value = get_nested_value(response_body, field_path)
    full_response = dump_payload(response_body)
    is_missing = field_value is MISSING or field_value is None

    if comparison == "defined":
        if is_missing:
            return VerificationResult(
                False,
                f"{field_path} is missing or undefined (got {field_value!r}). Full response: {full_response}",
            )
        return VerificationResult(True, "")

    if is_missing:
        return VerificationResult(
            False,
            f"{field_path} is missing. Expected: {as_text(expected_value)}, "
            f"but field is {field_value!r}. Full response: {full_response}",
        )

    if comparison == "equals":
        if _strict_equals(field_value, expected_value):
            return VerificationResult(True, "")
        return VerificationResult(
            False,
            f'Expected {field_path} to equal "{as_text(expected_value)}", '
            f'but got "{as_text(field_value)}". Full response: {full_response}',
        )

    if as_text(expected_value) in as_text(field_value):
        return VerificationResult(True, "")
    return VerificationResult(
        False,
        f'Expected {field_path} to contain "{as_text(expected_value)}", '
        f'but got "{as_text(field_value)}". Full response: {full_response}',
    )
