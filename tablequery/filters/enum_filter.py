import enum
from typing import Any

from sqlalchemy import Enum
from sqlalchemy.orm import Query

from tablequery.db.query import query_column
from tablequery.metadata.model_meta import FilterConfig, humanize_field

MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


class EnumFilter:
    """``column == value``, or ``column IN (...)`` for a list of values.

    Values are checked here rather than when the query is executed, so a bad
    value fails while the filter is being applied.
    """

    def apply(self, query: Query, filter_config: FilterConfig, value: Any) -> Query:
        column = query_column(query, filter_config.name)
        column_type = column.property.columns[0].type
        if isinstance(value, MULTI_VALUE_TYPES):
            values = [self._check_value(filter_config, column_type, item) for item in value]
            return query.filter(column.in_(values))
        return query.filter(column == self._check_value(filter_config, column_type, value))

    def _check_value(self, filter_config: FilterConfig, column_type: Any, value: Any) -> Any:
        if isinstance(value, (dict,) + MULTI_VALUE_TYPES):
            raise ValueError(
                f"{filter_config.name} expects a single value per item, got {type(value).__name__}"
            )
        if not isinstance(column_type, Enum):
            return value
        member = value.name if isinstance(value, enum.Enum) else value
        if not isinstance(member, str) or member not in column_type.enums:
            raise ValueError(f"{value!r} is not a valid value for {filter_config.name}")
        return value

    def key(self) -> str:
        return "enum"

    def label(self, filter_config: FilterConfig) -> str:
        return filter_config.label or humanize_field(filter_config.name)

    def options(self, filter_config: FilterConfig) -> list[Any]:
        return list(filter_config.options or [])
