"""Paste lifecycle and availability engine

All paste business rules live here and are shared by every transport
(`/pastes/{id}` JSON API and `/p/{id}` HTML page):

    - validating creation requests (all violations collected);
    - creating records and scheduling their physical reclaim;
    - deciding availability (time-to-live first, then view limit);
    - counting a view exactly once per successful read.

The engine never reads the wall clock or the environment. The clock and the
data access object are injected at construction.

Example:
    >>> lifecycle = PasteLifecycle(dao, FixedClock(0))
    >>> paste = lifecycle.create('hello', ttl_seconds=5, max_views=2)
    >>> lifecycle.record_view(paste.paste_id).remaining_views
    1
"""

import logging
from dataclasses import dataclass, replace
from collections.abc import Callable
from typing import Any

from pasteshare.constants import TTL, Paste
from pasteshare.models import Availability, PasteModel, PasteView
from pasteshare.exceptions import ValidationError, PasteUnavailableError
from pasteshare.dao.base import PasteBaseDAO
from pasteshare.utils.clock import Clock, iso_timestamp
from pasteshare.utils.identifiers import generate_paste_id


logger = logging.getLogger(__name__)

_MISSING = object()


# fmt: off
@dataclass(frozen=True)
class CreatePasteRequest:
    content: str
    ttl_seconds: int | None = None
    max_views: int | None = None
# fmt: on


def _as_integer(value: Any) -> int | None:
    """Return `value` as an int, or None if it isn't integral.

    Booleans are rejected even though they subclass int. Integral floats
    (JSON `5.0`) are accepted.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _validate_positive_integer(
    name: str, value: Any, minimum: int, errors: list[str], maximum: int | None = None
) -> int | None:
    if value is _MISSING or value is None:
        return None

    number = _as_integer(value)
    if number is None:
        errors.append(f'{name} must be an integer')
    elif number < minimum:
        errors.append(f'{name} must be >= {minimum}')
    elif maximum is not None and number > maximum:
        errors.append(f'{name} must be <= {maximum}')
    return number


def validate_create_request(body: Any) -> CreatePasteRequest:
    """Validate a paste creation request body

    Every rule is checked and all violations are reported together.

    Args:
        body (Any):
            Decoded JSON request body, expected to be an object.

    Returns:
        CreatePasteRequest: the validated fields.

    Raises:
        ValidationError:
            If any field is invalid. `errors` lists every message, e.g.
            ['Content cannot be empty', 'max_views must be >= 1'].

    Example:
        >>> validate_create_request({'content': 'hi', 'ttl_seconds': 60})
        CreatePasteRequest(content='hi', ttl_seconds=60, max_views=None)
    """
    if not isinstance(body, dict):
        raise ValidationError(['Invalid request body'])

    errors: list[str] = []

    content = body.get('content')
    if content is None or content == '':
        errors.append('Content is required')
    elif not isinstance(content, str):
        errors.append('Content must be a string')
    elif not content.strip():
        errors.append('Content cannot be empty')

    ttl_seconds = _validate_positive_integer(
        'ttl_seconds', body.get('ttl_seconds', _MISSING), Paste.MIN_TTL_SECONDS, errors, maximum=Paste.MAX_TTL_SECONDS
    )
    max_views = _validate_positive_integer('max_views', body.get('max_views', _MISSING), Paste.MIN_MAX_VIEWS, errors)

    if errors:
        raise ValidationError(errors)

    return CreatePasteRequest(content=content, ttl_seconds=ttl_seconds, max_views=max_views)


def evaluate_availability(paste: PasteModel, now: int) -> Availability:
    """Decide whether a paste can be read at `now` (ms since epoch)

    Pure function. Time-based expiry takes precedence over the view limit,
    and expiry is inclusive at the boundary: a paste created at 0 with a
    5 second TTL is readable at 4999 and expired at 5000.
    """
    if paste.ttl_seconds is not None and now >= paste.created_at + paste.ttl_seconds * 1000:
        return Availability.EXPIRED
    if paste.max_views is not None and paste.view_count >= paste.max_views:
        return Availability.VIEW_LIMIT_EXCEEDED
    return Availability.AVAILABLE


def remaining_views(paste: PasteModel) -> int | None:
    if paste.max_views is None:
        return None
    return max(0, paste.max_views - paste.view_count)


def expires_at(paste: PasteModel) -> str | None:
    if paste.ttl_seconds is None:
        return None
    return iso_timestamp(paste.created_at + paste.ttl_seconds * 1000)


def to_view(paste: PasteModel) -> PasteView:
    return PasteView(
        content=paste.content,
        remaining_views=remaining_views(paste),
        expires_at=expires_at(paste),
        view_count=paste.view_count,
        max_views=paste.max_views,
    )


class PasteLifecycle:
    """Create pastes and serve views against an injected store and clock

    Attributes:
        dao (PasteBaseDAO):
            Data access object holding paste records.
        clock (Clock):
            Source of "now" for this request.
        id_generator (Callable[[], str]):
            Produces new paste identifiers.
    """

    def __init__(self, dao: PasteBaseDAO, clock: Clock, id_generator: Callable[[], str] = generate_paste_id):
        self.dao = dao
        self.clock = clock
        self.id_generator = id_generator

    def create(self, content: str, ttl_seconds: int | None = None, max_views: int | None = None) -> PasteModel:
        """Validate and store a new paste

        When a TTL is given the record is written with a store expiry a grace
        period (60 s) after logical expiry, in the same write.

        Raises:
            ValidationError: If the fields are invalid. Nothing is stored.
            DataStoreError: If the store fails.
        """
        request = validate_create_request({'content': content, 'ttl_seconds': ttl_seconds, 'max_views': max_views})

        paste = PasteModel(
            paste_id=self.id_generator(),
            content=request.content,
            created_at=self.clock.now_ms(),
            ttl_seconds=request.ttl_seconds,
            max_views=request.max_views,
        )
        expire_seconds = None if paste.ttl_seconds is None else paste.ttl_seconds + TTL.GRACE_PERIOD
        self.dao.put(paste, expire_seconds=expire_seconds)

        logger.debug('Stored paste %s.', paste.paste_id, extra={'paste_id': paste.paste_id, 'created_at': paste.created_at})
        return paste

    def record_view(self, paste_id: str) -> PasteView:
        """Count one successful read of a paste and return what the reader sees

        "Now" is read once, before the store round trip, and the availability
        check and increment happen inside one atomic store update. Of N
        concurrent readers of a paste with `max_views = M`, exactly
        min(N, M) succeed. The returned view is built before the increment is
        written, so a read either counts and succeeds or changes nothing.

        Raises:
            PasteNotFoundError: If no record exists (never created or reclaimed).
            PasteUnavailableError: If the paste is expired or out of views.
            DataStoreError, PasteUpdateConflictError: On store failures.
        """
        now = self.clock.now_ms()
        view = None

        def count_view(paste: PasteModel) -> PasteModel:
            nonlocal view
            availability = evaluate_availability(paste, now)
            if availability is not Availability.AVAILABLE:
                raise PasteUnavailableError(paste_id, availability)
            counted = replace(paste, view_count=paste.view_count + 1)
            view = to_view(counted)
            return counted

        self.dao.update(paste_id, count_view)
        return view
