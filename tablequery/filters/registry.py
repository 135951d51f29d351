from tablequery.filters.base import Filter


class UnknownFilterError(LookupError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown filter [{key}]")
        self.key = key


class FilterRegistry:
    """Maps a filter kind to the capability that applies it.

    Filled once at startup, read-only while serving requests. Registering a
    key twice replaces the earlier binding.
    """

    def __init__(self) -> None:
        self._filters: dict[str, Filter] = {}

    def register(self, key: str, filter_: Filter) -> None:
        self._filters[key] = filter_

    def lookup(self, key: str) -> Filter:
        try:
            return self._filters[key]
        except KeyError:
            raise UnknownFilterError(key) from None

    def all(self) -> list[tuple[str, Filter]]:
        return list(self._filters.items())

    def __contains__(self, key: object) -> bool:
        return key in self._filters

    def __len__(self) -> int:
        return len(self._filters)


filter_registry = FilterRegistry()
