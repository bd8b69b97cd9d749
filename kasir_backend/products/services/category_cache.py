# products/services/category_cache.py

"""
CATEGORY READ CACHE

Purpose:
- Serve the category list and category-existence checks from Django's cache
  framework (CACHES["default"], LocMem unless CACHE_URL says otherwise).
- Advisory only: the database FK stays the source of truth for writes.

Rules:
- Every category write (API or admin) must call invalidate_categories().
- Only positive existence answers are cached, so a freshly created
  category is never reported missing.
- Stock values are NEVER cached anywhere.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.cache import cache

from products.models import Category

logger = logging.getLogger(__name__)

CATEGORY_LIST_KEY = "products:categories:list"
CATEGORY_EXISTS_KEY = "products:category:{id}:exists"


def _ttl() -> int:
    return int(getattr(settings, "CATEGORY_CACHE_TTL", 60))


def get_category_list(build):
    """
    Return the cached category list payload, building it with `build()`
    on a miss.

    `build` must return plain, picklable data (serializer output).
    """
    data = cache.get(CATEGORY_LIST_KEY)
    if data is None:
        data = build()
        cache.set(CATEGORY_LIST_KEY, data, _ttl())
    return data


def category_exists(category_id) -> bool:
    key = CATEGORY_EXISTS_KEY.format(id=category_id)
    if cache.get(key):
        return True

    exists = Category.objects.filter(pk=category_id).exists()
    if exists:
        cache.set(key, True, _ttl())
    return exists


def invalidate_categories(category_id=None) -> None:
    keys = [CATEGORY_LIST_KEY]
    if category_id is not None:
        keys.append(CATEGORY_EXISTS_KEY.format(id=category_id))
    cache.delete_many(keys)
    logger.debug("Category cache invalidated", extra={"category_id": category_id})
