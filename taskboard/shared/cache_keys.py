"""Cache key builders. Single place for key format (DRY).

Keys follow the {entity}_{qualifiers} convention: task_42,
tasklist_<status>_<priority>_<category>_<search>_<overdue>_<page>_<size>,
categories. Pattern keys end with CACHE_WILDCARD and address every key
sharing the prefix.

Callers (application services) build keys here; the cache service never
derives keys itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskboard.core.constants import (
    CACHE_KEY_CATEGORIES,
    CACHE_KEY_SEP,
    CACHE_PREFIX_TASK,
    CACHE_PREFIX_TASK_LIST,
    CACHE_WILDCARD,
)

if TYPE_CHECKING:
    from taskboard.application.dtos.task import TaskFilter

_ESCAPED_SEP = "%" + format(ord(CACHE_KEY_SEP), "02X")


def _escape(text: str) -> str:
    """Percent-encode the separator (and '%') inside free-text qualifiers."""
    return text.replace("%", "%25").replace(CACHE_KEY_SEP, _ESCAPED_SEP)


def _part(value: object) -> str:
    """Render one key qualifier; None becomes an empty segment.

    Enum values come from a closed set and are used as-is. Free text
    (category, search term) is escaped so it can never supply a separator
    and make two different filters share a key.
    """
    if value is None:
        return ""
    enum_value = getattr(value, "value", None)
    if enum_value is not None:
        return str(enum_value)
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str):
        return _escape(value)
    return str(value)


def task_key(task_id: int) -> str:
    """Cache key for a single task by id."""
    return f"{CACHE_PREFIX_TASK}{CACHE_KEY_SEP}{task_id}"


def task_list_key(task_filter: TaskFilter, page: int, page_size: int) -> str:
    """Cache key for one page of a filtered task listing.

    The filter should already be normalized (blank strings as None) so that
    equivalent queries share a key.
    """
    parts = [
        CACHE_PREFIX_TASK_LIST,
        _part(task_filter.status),
        _part(task_filter.priority),
        _part(task_filter.category),
        _part(task_filter.search_term),
        _part(task_filter.is_overdue),
        str(page),
        str(page_size),
    ]
    return CACHE_KEY_SEP.join(parts)


def task_list_pattern() -> str:
    """Pattern key matching every cached task listing (tasklist_*)."""
    return f"{CACHE_PREFIX_TASK_LIST}{CACHE_KEY_SEP}{CACHE_WILDCARD}"


def categories_key() -> str:
    """Cache key for the distinct category summary."""
    return CACHE_KEY_CATEGORIES


def is_pattern(key: str) -> bool:
    """Return True if key is a prefix pattern (ends with the wildcard marker)."""
    return key.endswith(CACHE_WILDCARD)


def pattern_prefix(key: str) -> str:
    """Return the literal prefix of a pattern key (wildcard stripped)."""
    return key[: -len(CACHE_WILDCARD)] if is_pattern(key) else key
