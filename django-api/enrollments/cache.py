"""Cache keys for the public training catalog."""

from django.conf import settings
from django.core.cache import cache

TRAININGS_LIST_PREFIX = "trainings:list"


def trainings_list_key(filters: dict[str, str]) -> str:
    suffix = ",".join(f"{k}={filters[k]}" for k in sorted(filters))
    return f"{TRAININGS_LIST_PREFIX}:{suffix}"


def training_id_key(training_id: str) -> str:
    return f"trainings:id:{training_id}"


def training_slug_key(slug: str) -> str:
    return f"trainings:slug:{slug}"


def _list_keys() -> set[str]:
    return cache.get(TRAININGS_LIST_PREFIX) or set()


def remember_list_key(key: str) -> None:
    """Track list keys so invalidation can drop every filter combination."""
    cache.set(TRAININGS_LIST_PREFIX, _list_keys() | {key}, timeout=None)


def get_or_set(key: str, compute):
    value = cache.get(key)
    if value is None:
        value = compute()
        cache.set(key, value, timeout=settings.CACHE_TIMEOUT)
    return value


def invalidate_training(training_id: str, slugs: tuple[str, ...] = ()) -> None:
    keys = _list_keys() | {TRAININGS_LIST_PREFIX, training_id_key(training_id)}
    keys |= {training_slug_key(slug) for slug in slugs if slug}
    cache.delete_many(list(keys))
