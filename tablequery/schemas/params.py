import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from tablequery.core.config import settings


class TableParams(BaseModel):
    search: str | None = Field(default=None, max_length=settings.search_max_length)
    sort_key: str | None = Field(default=None, alias="sortKey")
    sort_dir: Literal["asc", "desc"] | None = Field(default=None, alias="sortDir")
    page: int = Field(default=1, ge=1)
    per_page: int = Field(
        default=settings.default_per_page, ge=1, le=settings.max_per_page
    )
    selected_ids: list[int | str] = Field(default_factory=list, alias="selectedIds")
    filters: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def search_term(self) -> str:
        return (self.search or "").strip()


class ColumnOption(BaseModel):
    name: str
    label: str


class FilterOption(BaseModel):
    name: str
    kind: str
    label: str
    options: list[Any] = Field(default_factory=list)


class PreparedFilters(TableParams):
    all_columns: list[ColumnOption] = Field(default_factory=list, alias="allColumns")
    visible_columns: list[str] = Field(default_factory=list, alias="visibleColumns")
    filter_options: list[FilterOption] = Field(default_factory=list, alias="filterOptions")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Page(BaseModel):
    items: list[Any]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def from_index(self) -> int | None:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def to_index(self) -> int | None:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + len(self.items)

    @property
    def has_more(self) -> bool:
        return self.page < self.last_page
