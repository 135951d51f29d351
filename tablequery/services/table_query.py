"""Search, filter, sort and paginate a listing query for one mapped class."""
import enum
import logging
from typing import Any, Mapping

from pydantic import BaseModel
from sqlalchemy.orm import Query, load_only, selectinload

from tablequery.core.config import settings
from tablequery.db.query import apply_order, apply_pagination, entity_column
from tablequery.filters.registry import FilterRegistry, filter_registry
from tablequery.metadata.model_meta import ModelMeta, humanize_field, resolve_model_meta
from tablequery.schemas.params import (
    ColumnOption,
    FilterOption,
    Page,
    PreparedFilters,
    TableParams,
)
from tablequery.services.search import SearchService

filter_logger = logging.getLogger("tablequery.filters")
sort_logger = logging.getLogger("tablequery.sort")


class FilterStatus(str, enum.Enum):
    applied = "applied"
    skipped = "skipped"
    failed = "failed"


class FilterOutcome(BaseModel):
    key: str
    status: FilterStatus
    detail: str | None = None


def _is_empty(value: Any) -> bool:
    if value is None or value == "":
        return True
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def _as_params(params: TableParams | Mapping[str, Any] | None) -> TableParams:
    if params is None:
        return TableParams()
    if isinstance(params, TableParams):
        return params
    return TableParams.model_validate(params)


class TableQueryService:
    """Applies listing parameters to a ``session.query(Model)``.

    Usage::

        service = TableQueryService.for_model(Product)
        query = service.apply_all(db.query(Product), params, default_sort_field="name")
        page = service.paginate(query, params.page, params.per_page)

    SQLAlchemy queries are generative, so every method returns the query to
    keep using; the one passed in is left untouched.
    """

    model_meta: ModelMeta

    def __init__(
        self,
        search_service: SearchService | None = None,
        registry: FilterRegistry | None = None,
    ) -> None:
        self.search_service = search_service or SearchService()
        self.registry = registry if registry is not None else filter_registry
        self.last_filter_outcomes: list[FilterOutcome] = []

    @classmethod
    def for_model(
        cls, model: Any, registry: FilterRegistry | None = None
    ) -> "TableQueryService":
        return cls(registry=registry).set_model_meta(resolve_model_meta(model))

    def set_model_meta(self, model_meta: ModelMeta) -> "TableQueryService":
        self.model_meta = model_meta
        return self

    def apply_all(
        self,
        query: Query,
        params: TableParams | Mapping[str, Any] | None = None,
        default_sort_field: str | None = None,
        default_sort_dir: str | None = None,
    ) -> Query:
        params = _as_params(params)
        model = self.model_meta.model
        select_fields = self.model_meta.table_fields()
        searchable_fields = self.model_meta.searchable_fields()
        relations = self.model_meta.relations_names()

        if relations:
            query = query.options(
                *(selectinload(getattr(model, relation)) for relation in relations)
            )

        if select_fields:
            query = query.options(
                load_only(*(entity_column(model, field) for field in select_fields))
            )

        search_term = params.search_term
        if search_term:
            query = self.search_service.apply(query, search_term, searchable_fields)

        query, self.last_filter_outcomes = self.apply_filters_with_outcomes(
            query, params.filters
        )

        return self.apply_sort(query, params, default_sort_field, default_sort_dir)

    def apply_filters(self, query: Query, filters: Mapping[str, Any]) -> Query:
        query, _ = self.apply_filters_with_outcomes(query, filters)
        return query

    def apply_filters_with_outcomes(
        self, query: Query, filters: Mapping[str, Any]
    ) -> tuple[Query, list[FilterOutcome]]:
        """Apply each filter independently; one bad key never aborts the rest."""
        outcomes: list[FilterOutcome] = []
        for key, value in filters.items():
            query, outcome = self._apply_filter(query, key, value)
            outcomes.append(outcome)
        return query, outcomes

    def _apply_filter(
        self, query: Query, key: str, value: Any
    ) -> tuple[Query, FilterOutcome]:
        if _is_empty(value):
            return query, FilterOutcome(key=key, status=FilterStatus.skipped, detail="empty")

        configs = self.model_meta.filters_for_field(key)
        if not configs:
            filter_logger.warning(
                "Filter not found for key: %s",
                key,
                extra={"event": {"model": self.model_meta.name, "filter": key}},
            )
            return query, FilterOutcome(
                key=key, status=FilterStatus.skipped, detail="unknown_filter"
            )

        filtered = query
        try:
            for config in configs:
                filter_ = self.registry.lookup(config.kind)
                filtered = filter_.apply(filtered, config, value)
        except Exception as exc:
            filter_logger.warning(
                "Filter %s failed, skipping",
                key,
                exc_info=True,
                extra={
                    "event": {
                        "model": self.model_meta.name,
                        "filter": key,
                        "error": exc.__class__.__name__,
                    }
                },
            )
            return query, FilterOutcome(
                key=key, status=FilterStatus.failed, detail=str(exc)
            )
        return filtered, FilterOutcome(key=key, status=FilterStatus.applied)

    def apply_sort(
        self,
        query: Query,
        params: TableParams | Mapping[str, Any] | None = None,
        default_field: str | None = None,
        default_dir: str | None = None,
    ) -> Query:
        """Order by the requested ``sortKey``/``sortDir`` or by the defaults.

        Only table fields can be requested; anything else falls back to
        ``default_field``.
        """
        params = _as_params(params)
        field = default_field or settings.default_sort_field
        direction = default_dir or settings.default_sort_dir

        if params.sort_key:
            if params.sort_key in self.model_meta.table_fields():
                field = params.sort_key
            else:
                sort_logger.warning(
                    "Ignoring unknown sort key: %s",
                    params.sort_key,
                    extra={
                        "event": {
                            "model": self.model_meta.name,
                            "sort_key": params.sort_key,
                        }
                    },
                )
            direction = params.sort_dir or direction

        return apply_order(query, field, direction)

    def paginate(self, query: Query, page: int = 1, per_page: int | None = None) -> Page:
        page = max(page, 1)
        per_page = max(per_page or settings.default_per_page, 1)
        total = query.order_by(None).count()
        items = apply_pagination(query, page, per_page).all()
        return Page(items=items, total=total, page=page, per_page=per_page)

    def prepare_filters(self, request_data: Mapping[str, Any]) -> PreparedFilters:
        prepared = PreparedFilters.model_validate(request_data)
        if prepared.sort_dir is None:
            prepared.sort_dir = settings.default_sort_dir

        # *_id columns are foreign keys, not listing columns
        fields = [
            field
            for field in self.model_meta.table_fields()
            if not field.endswith("_id")
        ]
        prepared.all_columns = [
            ColumnOption(name=field, label=humanize_field(field)) for field in fields
        ]
        prepared.visible_columns = fields
        prepared.filter_options = self.filter_options()
        return prepared

    def filter_options(self) -> list[FilterOption]:
        """Label and allowed values of every configured filter, for UI rendering.

        Capabilities without ``label``/``options``, or kinds not registered,
        fall back to what the filter config itself carries.
        """
        options: list[FilterOption] = []
        for field in self.model_meta.filterable_fields():
            for config in self.model_meta.filters_for_field(field):
                filter_ = (
                    self.registry.lookup(config.kind) if config.kind in self.registry else None
                )
                label = getattr(filter_, "label", None)
                values = getattr(filter_, "options", None)
                options.append(
                    FilterOption(
                        name=field,
                        kind=config.kind,
                        label=label(config) if label else config.label or humanize_field(field),
                        options=values(config) if values else list(config.options or []),
                    )
                )
        return options
