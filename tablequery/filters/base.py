from typing import Any, Protocol

from sqlalchemy.orm import Query

from tablequery.metadata.model_meta import FilterConfig


class Filter(Protocol):
    """A stateless translation of one (field, value) pair into a predicate.

    ``label`` and ``options`` are optional and only used for UI rendering.
    """

    def apply(self, query: Query, filter_config: FilterConfig, value: Any) -> Query: ...
    def key(self) -> str: ...
