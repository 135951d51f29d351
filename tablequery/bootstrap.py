from tablequery.core.config import Settings, settings as default_settings
from tablequery.core.logging import configure_logging
from tablequery.filters.enum_filter import EnumFilter
from tablequery.filters.registry import FilterRegistry, filter_registry


def register_default_filters(registry: FilterRegistry = filter_registry) -> FilterRegistry:
    registry.register("enum", EnumFilter())
    return registry


def setup(settings: Settings | None = None, logs: bool = False) -> FilterRegistry:
    """Process startup: register the built-in filters.

    With ``logs=True`` the ``tablequery`` loggers also get a JSON handler;
    the host's logging setup is never touched.
    """
    settings = settings or default_settings
    if logs:
        configure_logging(settings.log_level)
    return register_default_filters()
