"""Listing metadata for SQLAlchemy mapped classes.

A mapped class already knows its columns and relationships; ``ModelMeta``
narrows that down to what a table listing needs. Classes can override any
part of it with class attributes::

    class Product(Base):
        __tablename__ = "products"
        __table_fields__ = ["id", "name", "price", "category_id"]
        __searchable_fields__ = ["name"]
        __table_relations__ = ["category"]
        __table_filters__ = {
            "category": [{"kind": "enum", "name": "category_id"}],
        }
"""
from functools import lru_cache
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Enum, String, inspect


class FilterConfig(BaseModel):
    kind: str
    name: str
    label: str | None = None
    options: list[Any] | None = None

    model_config = ConfigDict(frozen=True)


def humanize_field(name: str) -> str:
    label = name.replace("_", " ")
    return label[:1].upper() + label[1:]


class ModelMeta:
    def __init__(
        self,
        model: Any,
        table_fields: Iterable[str] = (),
        searchable_fields: Iterable[str] = (),
        relations: Iterable[str] = (),
        filters: Mapping[str, Iterable[FilterConfig | Mapping[str, Any]]] | None = None,
    ) -> None:
        self.model = model
        self._table_fields = tuple(table_fields)
        self._searchable_fields = tuple(searchable_fields)
        self._relations = tuple(relations)
        self._filters = {
            key: tuple(_as_filter_config(item) for item in configs)
            for key, configs in (filters or {}).items()
        }

    @property
    def name(self) -> str:
        return self.model.__name__

    def table_fields(self) -> list[str]:
        return list(self._table_fields)

    def searchable_fields(self) -> list[str]:
        return list(self._searchable_fields)

    def relations_names(self) -> list[str]:
        return list(self._relations)

    def filters_for_field(self, key: str) -> list[FilterConfig]:
        return list(self._filters.get(key, ()))

    def filterable_fields(self) -> list[str]:
        return list(self._filters)

    def __repr__(self) -> str:
        return f"ModelMeta({self.name})"


def _as_filter_config(item: FilterConfig | Mapping[str, Any]) -> FilterConfig:
    if isinstance(item, FilterConfig):
        return item
    return FilterConfig.model_validate(item)


@lru_cache
def resolve_model_meta(model: Any) -> ModelMeta:
    mapper = inspect(model)
    columns = {attr.key: attr.columns[0] for attr in mapper.column_attrs}

    table_fields = getattr(model, "__table_fields__", None)
    if table_fields is None:
        table_fields = list(columns)

    searchable = getattr(model, "__searchable_fields__", None)
    if searchable is None:
        searchable = [
            key
            for key, column in columns.items()
            if isinstance(column.type, String) and not isinstance(column.type, Enum)
        ]

    relations = getattr(model, "__table_relations__", None)
    if relations is None:
        relations = [rel.key for rel in mapper.relationships]

    filters = getattr(model, "__table_filters__", None)
    if filters is None:
        filters = {
            key: [FilterConfig(kind="enum", name=key, options=list(column.type.enums))]
            for key, column in columns.items()
            if isinstance(column.type, Enum)
        }

    return ModelMeta(
        model,
        table_fields=table_fields,
        searchable_fields=searchable,
        relations=relations,
        filters=filters,
    )
