"""URL and JSON helpers shared by the controllers."""

from __future__ import annotations

import re
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from core.domain.errors import ConfigurationError, DeserializationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_URL_PREFIX_RE = re.compile(r"^(https?://[^/]+)")
_DUPLICATE_SLASHES_RE = re.compile(r"//+")


def clean_url(url: str) -> str:
    """Collapse duplicate slashes after the `scheme://host` prefix.

    Raises `ConfigurationError` when the URL does not start with http(s)://host.
    """

    match = _URL_PREFIX_RE.match(url)
    if match is None:
        raise ConfigurationError(f"Invalid URL format: {url!r}")

    prefix = match.group(1)
    rest = _DUPLICATE_SLASHES_RE.sub("/", url[len(prefix) :])
    return prefix + rest


def append_template_parameters(path: str, parameters: dict[str, Any]) -> str:
    """Replace `{name}` placeholders with percent-encoded values."""

    out = path
    for name, value in parameters.items():
        encoded = "" if value is None else quote(str(value), safe="")
        out = out.replace(f"{{{name}}}", encoded)
    return out


def serialize(body: BaseModel) -> bytes:
    """Serialize a request model with wire names, skipping unset optionals."""

    return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def deserialize(text: str, model: type[ModelT], *, status_code: int = 200) -> ModelT:
    try:
        return model.model_validate_json(text)
    except ValidationError as exc:
        raise DeserializationError(
            f"Response body does not match {model.__name__}: {exc.error_count()} error(s)",
            status_code=status_code,
            body=text,
        ) from exc

