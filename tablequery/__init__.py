"""Search, filter, sort and paginate SQLAlchemy listing queries."""
from tablequery.bootstrap import register_default_filters, setup
from tablequery.filters import EnumFilter, Filter, FilterRegistry, UnknownFilterError, filter_registry
from tablequery.metadata import FilterConfig, ModelMeta, resolve_model_meta
from tablequery.schemas.params import (
    ColumnOption,
    FilterOption,
    Page,
    PreparedFilters,
    TableParams,
)
from tablequery.services.search import SearchService
from tablequery.services.table_query import FilterOutcome, FilterStatus, TableQueryService

__all__ = [
    "ColumnOption",
    "EnumFilter",
    "Filter",
    "FilterConfig",
    "FilterOption",
    "FilterOutcome",
    "FilterRegistry",
    "FilterStatus",
    "ModelMeta",
    "Page",
    "PreparedFilters",
    "SearchService",
    "TableParams",
    "TableQueryService",
    "UnknownFilterError",
    "filter_registry",
    "register_default_filters",
    "resolve_model_meta",
    "setup",
]
