from typing import Any

from sqlalchemy import asc, desc, inspect
from sqlalchemy.orm import Query


class UnknownColumnError(LookupError):
    def __init__(self, entity: Any, name: str) -> None:
        super().__init__(f"Unknown column [{name}] on {entity.__name__}")
        self.name = name


def query_entity(query: Query) -> Any:
    """Return the mapped class a legacy ``session.query(Model)`` selects."""
    return query.column_descriptions[0]["entity"]


def entity_column(entity: Any, name: str):
    if name not in inspect(entity).column_attrs:
        raise UnknownColumnError(entity, name)
    return getattr(entity, name)


def query_column(query: Query, name: str):
    return entity_column(query_entity(query), name)


def apply_order(query: Query, field: str, direction: str) -> Query:
    column = query_column(query, field)
    order = desc if direction.lower() == "desc" else asc
    return query.order_by(order(column))


def apply_pagination(query: Query, page: int, limit: int) -> Query:
    page = max(page, 1)
    limit = max(limit, 1)
    offset = (page - 1) * limit
    return query.offset(offset).limit(limit)
