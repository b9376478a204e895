"""FastAPI dependency injection."""

from pinsight.data.resolver import AreaResolver

# One resolver per process so the live demographics cache is shared by all requests.
_resolver: AreaResolver | None = None


def get_resolver() -> AreaResolver:
    global _resolver
    if _resolver is None:
        _resolver = AreaResolver()
    return _resolver
