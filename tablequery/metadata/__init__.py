from tablequery.metadata.model_meta import (
    FilterConfig,
    ModelMeta,
    humanize_field,
    resolve_model_meta,
)

__all__ = [
    "FilterConfig",
    "ModelMeta",
    "humanize_field",
    "resolve_model_meta",
]
