"""Request validation for the contacts API.

Validators never raise: each returns ``Valid(value)`` carrying the parsed
input, or ``Invalid(message)`` carrying the client-facing error message.
The handler layer decides how an ``Invalid`` is reported over HTTP.

Example:
    ```python
    result = validate_create_body({"name": "Artur Daniel", "phone": "79900000000"})
    if isinstance(result, Invalid):
        raise BadRequestError(result.message)
    contact_input = result.value
    ```
"""

import json
import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from contacts_api.dto import CreateContactInput, PageQuery, UpdateContactInput

T = TypeVar("T")

# First two whitespace-separated words must have at least three characters each
NAME_PATTERN = re.compile(r"^(?=(?:\S+\s+){1,})(\S{3,}\s+\S{3,})")
# Two digits, a literal 9, eight digits
PHONE_PATTERN = re.compile(r"\d{2}9\d{8}", re.ASCII)

CONTACT_FIELDS = ("name", "phone")
PAGE_PARAMS = ("page", "limit")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Range of a signed 64-bit SQL INTEGER column
MAX_INTEGER = 2**63 - 1

MSG_ID_REQUIRED = "Contact ID is required"
MSG_ONLY_ID = 'Invalid parameter. Only "id" is allowed.'
MSG_FIELDS_REQUIRED = "Name and phone are required."
MSG_NAME_FORMAT = "Name must contain at least two words, each with a minimum of three letters."
MSG_PHONE_FORMAT = "Phone must be in the format XX9XXXXXXXX."
MSG_PAGE = "Page must be a positive integer."
MSG_LIMIT = "Limit must be a positive integer."
MSG_BODY_NOT_OBJECT = "Request body must be a JSON object."
MSG_BODY_MALFORMED = "Malformed JSON body."


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successful validation carrying the parsed value."""

    value: T


@dataclass(frozen=True)
class Invalid:
    """Failed validation carrying the message shown to the client."""

    message: str


ValidationResult = Union[Valid[T], Invalid]


def coerce_id(raw: Any) -> int | None:
    """Coerce a path identifier to an integer.

    Accepts integral numbers written as text (``"7"``, ``" 7 "``, ``"7.0"``,
    ``"1e1"``); an empty string coerces to 0. Anything else returns None,
    which never matches a stored contact.

    Args:
        raw: The raw path parameter value

    Returns:
        The integer id, or None when the input is not an integral number
        within the range of an SQL INTEGER
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return _in_range(raw)

    text = str(raw).strip()
    if text == "":
        return 0
    if "_" in text:
        return None

    try:
        return _in_range(int(text))
    except ValueError:
        pass

    try:
        number = float(text)
    except ValueError:
        return None

    if math.isfinite(number) and number.is_integer():
        return _in_range(int(number))
    return None


def _in_range(number: int) -> int | None:
    return number if -MAX_INTEGER <= number <= MAX_INTEGER else None


def is_valid_name(value: Any) -> bool:
    return isinstance(value, str) and NAME_PATTERN.match(value) is not None


def is_valid_phone(value: Any) -> bool:
    return isinstance(value, str) and PHONE_PATTERN.fullmatch(value) is not None


def _unknown_keys(data: Mapping[str, Any], allowed: tuple[str, ...]) -> list[str]:
    return [key for key in data if key not in allowed]


def parse_json_body(raw: bytes) -> ValidationResult[dict[str, Any]]:
    """Parse a raw request body into a JSON object.

    An empty body is treated as ``{}``.
    """
    if not raw or not raw.strip():
        return Valid({})

    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return Invalid(MSG_BODY_MALFORMED)

    if not isinstance(body, dict):
        return Invalid(MSG_BODY_NOT_OBJECT)
    return Valid(body)


def validate_id_params(path_params: Mapping[str, Any]) -> ValidationResult[int | None]:
    """Check that ``id`` is the one and only path parameter.

    Returns:
        ``Valid`` with the coerced id (None when it is not numeric)
    """
    if not path_params.get("id"):
        return Invalid(MSG_ID_REQUIRED)

    if len(path_params) > 1:
        return Invalid(MSG_ONLY_ID)

    return Valid(coerce_id(path_params["id"]))


def group_query_params(items: Iterable[tuple[str, str]]) -> dict[str, str | list[str]]:
    """Group raw ``(key, value)`` query pairs by key.

    A key given once maps to its value; a repeated key maps to the list of
    all its values, which no validator accepts as a number.
    """
    grouped: dict[str, str | list[str]] = {}
    for key, value in items:
        if key not in grouped:
            grouped[key] = value
        else:
            previous = grouped[key]
            grouped[key] = [*previous, value] if isinstance(previous, list) else [previous, value]
    return grouped


def _positive_int(raw: Any) -> int | None:
    if isinstance(raw, (list, tuple)):
        return None
    number = coerce_id(raw)
    if number is None or number < 1:
        return None
    return number


def validate_page_query(query: Mapping[str, Any]) -> ValidationResult[PageQuery]:
    """Validate the ``page``/``limit`` query string.

    Business rules:
    1. Only ``page`` and ``limit`` are accepted
    2. Non-empty values must be integers >= 1, given at most once
    3. Missing or empty values fall back to page 1, limit 10
    4. The resulting offset must fit in an SQL INTEGER
    """
    unknown = _unknown_keys(query, PAGE_PARAMS)
    if unknown:
        return Invalid(f"Invalid parameters: {', '.join(unknown)}")

    page = DEFAULT_PAGE
    raw_page = query.get("page")
    if raw_page:
        page_number = _positive_int(raw_page)
        if page_number is None:
            return Invalid(MSG_PAGE)
        page = page_number

    limit = DEFAULT_LIMIT
    raw_limit = query.get("limit")
    if raw_limit:
        limit_number = _positive_int(raw_limit)
        if limit_number is None:
            return Invalid(MSG_LIMIT)
        limit = limit_number

    if (page - 1) * limit > MAX_INTEGER:
        return Invalid(MSG_PAGE)

    return Valid(PageQuery(page=page, limit=limit))


def validate_create_body(body: Mapping[str, Any]) -> ValidationResult[CreateContactInput]:
    """Validate a new contact.

    Checks run in order and stop at the first failure:
    presence, extraneous fields, name pattern, phone pattern.
    """
    name = body.get("name")
    phone = body.get("phone")

    if not name or not phone:
        return Invalid(MSG_FIELDS_REQUIRED)

    extra = _unknown_keys(body, CONTACT_FIELDS)
    if extra:
        return Invalid(f"Invalid parameters: {', '.join(extra)}")

    if not is_valid_name(name):
        return Invalid(MSG_NAME_FORMAT)

    if not is_valid_phone(phone):
        return Invalid(MSG_PHONE_FORMAT)

    return Valid(CreateContactInput(name=name, phone=phone))


def validate_update_body(body: Mapping[str, Any]) -> ValidationResult[UpdateContactInput]:
    """Validate a partial contact update.

    ``name`` is checked whenever the key carries a non-null value (an empty
    string fails); ``phone`` only when it is truthy, so ``""`` leaves the
    stored phone untouched.
    """
    extra = _unknown_keys(body, CONTACT_FIELDS)
    if extra:
        return Invalid(f"Invalid parameters: {', '.join(extra)}")

    name = body.get("name")
    if name is not None and not is_valid_name(name):
        return Invalid(MSG_NAME_FORMAT)

    phone = body.get("phone")
    if phone and not is_valid_phone(phone):
        return Invalid(MSG_PHONE_FORMAT)

    return Valid(UpdateContactInput(name=name, phone=phone or None))
