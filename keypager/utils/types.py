from typing import Any, Mapping

# Type aliases for better clarity
Row = Any
FilterSpec = dict[str, Any]
SortSpec = list[tuple[str, int]]

_MISSING = object()


def get_field(row: Any, field: str, default: Any = _MISSING) -> Any:
    """Read a field from a mapping or an attribute of an object.

    Dotted names walk nested mappings/objects, the way MongoDB field paths do.

    Args:
        row: Mapping or object holding the value
        field: Field name, optionally dotted
        default: Returned when the field is absent (raises KeyError otherwise)

    Returns:
        The field value
    """
    value = row
    for part in field.split("."):
        if isinstance(value, Mapping):
            value = value.get(part, _MISSING)
        else:
            value = getattr(value, part, _MISSING)
        if value is _MISSING:
            if default is _MISSING:
                raise KeyError(field)
            return default
    return value


def and_filters(*filters: FilterSpec | None) -> FilterSpec:
    """Combine filter dicts conjunctively.

    Unlike a dict merge, keys present in several filters never override each
    other: more than one non-empty filter is wrapped in ``$and``.

    Args:
        *filters: Filter dicts; empty or None entries are skipped

    Returns:
        Combined filter dictionary
    """
    parts = [f for f in filters if f]
    if not parts:
        return {}
    if len(parts) == 1:
        return dict(parts[0])
    return {"$and": parts}
