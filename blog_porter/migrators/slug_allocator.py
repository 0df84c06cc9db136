"""
URL slug allocation.

``slug_base`` turns a title into a URL-safe identifier; :class:`SlugAllocator`
makes it unique against the store by probing ``base``, ``base-1``,
``base-2``... until a free candidate is found.
"""

from __future__ import annotations

import re
from typing import Callable, Iterator, Optional, Set

from blog_porter.utils.errors import DuplicateSlugError, SlugExhausted
from .post_store import PostStore

FALLBACK_SLUG = "post"
DEFAULT_MAX_ATTEMPTS = 1000


def slug_base(title: str) -> str:
    text = (title or "").lower()
    text = re.sub(r"[^a-z0-9\s-]", "", text)
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-") or FALLBACK_SLUG


def candidates(base: str) -> Iterator[str]:
    yield base
    n = 1
    while True:
        yield f"{base}-{n}"
        n += 1


class SlugAllocator:
    """
    Allocates slugs that are unique within a store.

    Without ``claim`` a candidate is reserved in-process only, so repeated
    calls for the same title keep yielding distinct slugs.  With ``claim``
    (usually the store insert) the existence check and the reservation
    happen in one call: a :class:`DuplicateSlugError` raised by ``claim``
    means another writer got there first and the next suffix is tried.
    """

    def __init__(self, store: PostStore, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> None:
        self.store = store
        self.max_attempts = max(1, max_attempts)
        self._reserved: Set[str] = set()

    def is_taken(self, slug: str) -> bool:
        return slug in self._reserved or self.store.exists_by_slug(slug)

    def allocate(self, title: str, claim: Optional[Callable[[str], object]] = None) -> str:
        """Return a free slug for ``title`` and reserve it.

        :raises SlugExhausted: if ``max_attempts`` candidates are all taken.
        :raises StoreError: if the store fails while probing or claiming.
        """
        base = slug_base(title)
        for attempt, candidate in enumerate(candidates(base)):
            if attempt >= self.max_attempts:
                break
            if self.is_taken(candidate):
                continue
            if claim is not None:
                try:
                    claim(candidate)
                except DuplicateSlugError:
                    continue
            self._reserved.add(candidate)
            return candidate
        raise SlugExhausted(base, self.max_attempts)
