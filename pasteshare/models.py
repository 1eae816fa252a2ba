from dataclasses import dataclass
from enum import StrEnum


class Availability(StrEnum):
    AVAILABLE = 'available'
    EXPIRED = 'expired'
    VIEW_LIMIT_EXCEEDED = 'view_limit_exceeded'


# fmt: off
@dataclass(frozen=True)
class PasteModel:
    """Represent a stored paste.

    Only `view_count` ever changes after creation, and only upwards.

    Example:
        >>> paste = PasteModel(paste_id='V1StGXR8', content='hello', created_at=0, max_views=1)
        >>> paste.view_count
        0
    """
    paste_id: str                   # Opaque short identifier
    content: str                    # Paste text, immutable
    created_at: int                 # Milliseconds since epoch, resolved at creation
    ttl_seconds: int | None = None  # None: never expires by time
    max_views: int | None = None    # None: never expires by view count
    view_count: int = 0             # Successful reads so far


@dataclass(frozen=True)
class PasteView:
    """Read model returned by a successful view."""
    content: str
    remaining_views: int | None     # max(0, max_views - view_count), None without a view limit
    expires_at: str | None          # ISO-8601 (ms precision, 'Z'), None without a TTL
    view_count: int
    max_views: int | None = None

    def as_api_dict(self) -> dict:
        return {
            'content': self.content,
            'remaining_views': self.remaining_views,
            'expires_at': self.expires_at,
        }
# fmt: on
