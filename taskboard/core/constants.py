"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by
taskboard.shared.cache_keys and the tiered cache service.
"""

# Cache key prefixes (entity family, joined to qualifiers with CACHE_KEY_SEP)
CACHE_PREFIX_TASK = "task"
CACHE_PREFIX_TASK_LIST = "tasklist"
CACHE_KEY_CATEGORIES = "categories"

# Delimiter for composite keys
CACHE_KEY_SEP = "_"

# Trailing marker that turns a key into a prefix pattern (e.g. tasklist_*)
CACHE_WILDCARD = "*"

# Key read by connectivity probes; never written
CACHE_PROBE_KEY = "connection_test"

# Pagination defaults for task listings
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
