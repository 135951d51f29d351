import re
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from tablequery.schemas.params import TableParams

FILTER_PARAM_PATTERN = re.compile(r"^filters\[(?P<key>[^\]]+)\](?P<many>\[\])?$")
LIST_PARAMS = {"selectedIds": "selectedIds", "selectedIds[]": "selectedIds"}


def parse_table_params(items: list[tuple[str, str]]) -> dict[str, Any]:
    """Turn query string pairs into the raw mapping ``TableParams`` validates.

    Understands ``filters[status]=active``, ``filters[tag][]=a`` (always a
    list) and repeated ``selectedIds`` / ``selectedIds[]``. Repeating a plain
    ``filters[key]`` also collects the values into a list.
    """
    data: dict[str, Any] = {}
    filters: dict[str, Any] = {}
    selected: list[str] = []
    for name, value in items:
        match = FILTER_PARAM_PATTERN.match(name)
        if match:
            key = match.group("key")
            if match.group("many"):
                filters.setdefault(key, [])
                if not isinstance(filters[key], list):
                    filters[key] = [filters[key]]
                filters[key].append(value)
            elif key in filters:
                current = filters[key]
                filters[key] = (current if isinstance(current, list) else [current]) + [value]
            else:
                filters[key] = value
        elif name in LIST_PARAMS:
            selected.extend(v for v in value.split(",") if v)
        else:
            data[name] = value
    if filters:
        data["filters"] = filters
    if selected:
        data["selectedIds"] = selected
    return data


def get_table_params(request: Request) -> TableParams:
    raw = parse_table_params(list(request.query_params.multi_items()))
    try:
        return TableParams.model_validate(raw)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
