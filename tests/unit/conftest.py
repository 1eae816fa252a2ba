from collections.abc import Callable

import pytest

from pasteshare.models import PasteModel
from pasteshare.dao.base import PasteBaseDAO
from pasteshare.dao.exceptions import PasteNotFoundError


class InMemoryPasteDAO(PasteBaseDAO):
    """Dictionary-backed PasteBaseDAO for engine and handler tests.

    Records a `(paste_id, seconds)` tuple per expiry, whether set by put()
    or expire(), instead of reclaiming anything.
    """

    def __init__(self):
        self.records: dict[str, PasteModel] = {}
        self.expiries: list[tuple[str, int]] = []
        self.healthy = True

    def put(self, paste: PasteModel, expire_seconds: int | None = None, **kwargs) -> 'InMemoryPasteDAO':
        self.records[paste.paste_id] = paste
        if expire_seconds is not None:
            self.expiries.append((paste.paste_id, expire_seconds))
        return self

    def get(self, paste_id: str, **kwargs) -> PasteModel:
        try:
            return self.records[paste_id]
        except KeyError:
            raise PasteNotFoundError(f"Paste with id '{paste_id}' not found.") from None

    def expire(self, paste_id: str, seconds: int, **kwargs) -> bool:
        self.expiries.append((paste_id, seconds))
        return paste_id in self.records

    def update(self, paste_id: str, mutate: Callable[[PasteModel], PasteModel], **kwargs) -> PasteModel:
        updated = mutate(self.get(paste_id))
        self.records[paste_id] = updated
        return updated

    def probe(self, **kwargs) -> bool:
        return self.healthy


@pytest.fixture
def memory_dao() -> InMemoryPasteDAO:
    return InMemoryPasteDAO()
