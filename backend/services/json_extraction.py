"""Pull a JSON object out of free-form model output.

Models are told to answer with JSON only, but they still wrap it in prose or
code fences. ``find_json_object`` returns the first balanced ``{...}`` span
(string-literal aware); ``extract_json`` and ``extract_model`` wrap the
outcome in an ``Extraction`` that holds either the value or the
``ResponseFormatError`` explaining why there is none.
"""

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from services.errors import ResponseFormatError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Extraction(Generic[T]):
    value: T | None = None
    error: ResponseFormatError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def _closing_brace(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def find_json_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` substring, or None."""
    start = text.find("{")
    while start != -1:
        end = _closing_brace(text, start)
        if end is not None:
            return text[start : end + 1]
        start = text.find("{", start + 1)
    return None


def _failure(detail: str) -> Extraction[Any]:
    return Extraction(error=ResponseFormatError(detail=detail))


def extract_json(text: str | None) -> Extraction[dict[str, Any]]:
    if not text or not text.strip():
        return _failure("empty response")

    candidate = find_json_object(text)
    if candidate is None:
        return _failure("no JSON object found")

    try:
        # strict=False tolerates raw newlines inside strings (cover letters)
        value = json.loads(candidate, strict=False)
    except json.JSONDecodeError as e:
        return _failure(f"invalid JSON: {e}")
    return Extraction(value=value)


def extract_model(text: str | None, model: type[M]) -> Extraction[M]:
    """Extract the first JSON object and validate it as ``model``."""
    raw = extract_json(text)
    if not raw.ok:
        return raw  # type: ignore[return-value]
    try:
        return Extraction(value=model.model_validate(raw.value))
    except SchemaError as e:
        return _failure(f"{model.__name__} shape mismatch: {e.error_count()} error(s)")
