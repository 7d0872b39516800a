def strip_required(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


def blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def split_list(value: object, separator: str) -> list[str]:
    """Accept a list or ``separator``-delimited text; blank items are dropped."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(separator)
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        raise ValueError("Expected a list or text")
    return [item.strip() for item in items if item.strip()]
