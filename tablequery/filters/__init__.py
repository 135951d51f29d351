from tablequery.filters.base import Filter
from tablequery.filters.enum_filter import EnumFilter
from tablequery.filters.registry import FilterRegistry, UnknownFilterError, filter_registry

__all__ = [
    "EnumFilter",
    "Filter",
    "FilterRegistry",
    "UnknownFilterError",
    "filter_registry",
]
