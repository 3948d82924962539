"""Query and option validation.

``validate_query`` is the only way a :class:`Query` enters the pipeline: it
checks types, trims every field, and rejects blank values with a
:class:`ValidationError` naming the offending field.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from lyrlib.models.lyrics import Query
from lyrlib.utils.errors import ValidationError

_ModelT = TypeVar("_ModelT", bound=BaseModel)

_REQUIRED_FIELDS = ("track_name", "artist_name")


def _require_text(partial: Mapping[str, Any], field: str) -> str:
    value = partial.get(field)
    if value is None:
        raise ValidationError("track_name and artist_name are required")
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value.strip()


def validate_query(partial: Query | Mapping[str, Any]) -> Query:
    """Validate and normalize a raw query.

    Args:
        partial: A mapping with ``track_name``, ``artist_name`` and an
                 optional ``album_name``, or an existing :class:`Query`.

    Returns:
        A new Query with trimmed fields.  ``album_name`` is ``None`` when the
        caller did not supply one.

    Raises:
        ValidationError: If a required field is missing, not a string or
                         blank, or if ``album_name`` is supplied but blank.
    """
    if isinstance(partial, Query):
        partial = partial.model_dump()
    elif not isinstance(partial, Mapping):
        raise ValidationError("query must be a mapping of track_name/artist_name/album_name")

    track_name, artist_name = (_require_text(partial, f) for f in _REQUIRED_FIELDS)

    album_name = partial.get("album_name")
    if album_name is not None:
        if not isinstance(album_name, str) or not album_name.strip():
            raise ValidationError("album_name must be a non-empty string when provided")
        album_name = album_name.strip()

    return Query(track_name=track_name, artist_name=artist_name, album_name=album_name)


def coerce_options(
    model_cls: type[_ModelT],
    options: _ModelT | Mapping[str, Any] | None,
) -> _ModelT:
    """Turn ``None``, a mapping, or a model instance into *model_cls*.

    Raises:
        ValidationError: If the mapping does not satisfy *model_cls*.
    """
    if options is None:
        return model_cls()
    if isinstance(options, model_cls):
        return options
    try:
        return model_cls.model_validate(dict(options))
    except (PydanticValidationError, TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {model_cls.__name__}: {exc}") from exc
