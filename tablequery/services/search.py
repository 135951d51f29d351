from typing import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Query

from tablequery.db.query import query_column


class SearchService:
    def apply(
        self,
        query: Query,
        search_term: str | None,
        searchable_fields: Sequence[str] | None = (),
    ) -> Query:
        """AND a ``(f1 LIKE %term% OR f2 LIKE %term% ...)`` group onto ``query``.

        The term is not escaped, so ``%`` and ``_`` keep their wildcard meaning.
        """
        if not search_term or not searchable_fields:
            return query
        pattern = f"%{search_term}%"
        return query.filter(
            or_(*(query_column(query, field).like(pattern) for field in searchable_fields))
        )
