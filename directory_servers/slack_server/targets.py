"""Id-or-name target validation shared by every command."""

from typing import Optional, Tuple, TypeVar

from ..errors import AmbiguousInputError, MissingInputError

T = TypeVar("T")


def pick_target(
    target: str, id_value: Optional[T], name_value: Optional[T]
) -> Tuple[Optional[T], Optional[T]]:
    """Check that exactly one of the id form or name form of ``target`` is set.

    Empty strings and empty lists count as unset. Returns ``(id_value, None)``
    or ``(None, name_value)`` so callers only ever see the form they must act on.
    """
    has_id = bool(id_value)
    has_name = bool(name_value)
    if has_id and has_name:
        raise AmbiguousInputError(target)
    if not has_id and not has_name:
        raise MissingInputError(target)
    return (id_value, None) if has_id else (None, name_value)
