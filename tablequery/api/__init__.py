from tablequery.api.deps import get_table_params, parse_table_params
from tablequery.api.setup import install_table_query

__all__ = ["get_table_params", "install_table_query", "parse_table_params"]
