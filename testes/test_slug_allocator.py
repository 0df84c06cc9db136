import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from blog_porter.migrators.slug_allocator import SlugAllocator, candidates, slug_base
from blog_porter.utils.errors import DuplicateSlugError, SlugExhausted


class SetStore:
    """Store double answering ``exists_by_slug`` from a set."""

    def __init__(self, slugs=()):
        self.slugs = set(slugs)

    def exists_by_slug(self, slug):
        return slug in self.slugs


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Hello World", "hello-world"),
        ("  Hello,   World!  ", "hello-world"),
        ("C++ & Python -- a guide", "c-python-a-guide"),
        ("Already-slugged-title", "already-slugged-title"),
        ("2024 Review", "2024-review"),
        ("!!!", "post"),
        ("مرحبا", "post"),
        ("", "post"),
    ],
)
def test_slug_base(title, expected):
    assert slug_base(title) == expected


def test_candidates_sequence():
    gen = candidates("x")
    assert [next(gen) for _ in range(4)] == ["x", "x-1", "x-2", "x-3"]


def test_free_base_is_used_as_is():
    allocator = SlugAllocator(SetStore())
    assert allocator.allocate("Hello World") == "hello-world"


def test_taken_slugs_are_skipped():
    allocator = SlugAllocator(SetStore({"x", "x-1"}))
    assert allocator.allocate("X") == "x-2"


def test_same_title_twice_gets_distinct_slugs():
    allocator = SlugAllocator(SetStore())
    first = allocator.allocate("Same")
    second = allocator.allocate("Same")
    assert (first, second) == ("same", "same-1")


def test_exhausted_after_max_attempts():
    store = SetStore({"x", "x-1", "x-2"})
    allocator = SlugAllocator(store, max_attempts=3)
    with pytest.raises(SlugExhausted) as info:
        allocator.allocate("x")
    assert info.value.base == "x"
    assert info.value.attempts == 3


def test_claim_conflict_moves_to_next_suffix():
    store = SetStore()
    claimed = []

    def claim(slug):
        # another writer inserts "race" between our check and our insert
        if slug == "race":
            store.slugs.add(slug)
            raise DuplicateSlugError(slug)
        claimed.append(slug)

    allocator = SlugAllocator(store)
    assert allocator.allocate("Race", claim=claim) == "race-1"
    assert claimed == ["race-1"]


def test_claim_errors_other_than_duplicates_propagate():
    def claim(slug):
        raise RuntimeError("disk full")

    allocator = SlugAllocator(SetStore())
    with pytest.raises(RuntimeError):
        allocator.allocate("Anything", claim=claim)
    assert not allocator.is_taken("anything")
