from .blog_post import (
    CanonicalRecord,
    DraftRecord,
    EnrichedRecord,
    ImportResult,
    ImportState,
    PostStatus,
)

__all__ = [
    "CanonicalRecord",
    "DraftRecord",
    "EnrichedRecord",
    "ImportResult",
    "ImportState",
    "PostStatus",
]
