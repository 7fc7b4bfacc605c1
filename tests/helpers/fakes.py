"""
In-memory test doubles.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from boutique.domain.entities.outfit import Outfit
from boutique.domain.entities.product import ProductSummary
from boutique.domain.exceptions import EntityNotFoundError
from boutique.domain.repositories import (
    ICustomerDirectory,
    IOutfitRepository,
    IProductCatalog,
)
from boutique.domain.services import IEventPublisher
from shared.lifecycle import ListenerState
from shared.reporter import SystemReporter


class RecordingReporter(SystemReporter):
    """SystemReporter that also records (level, context, message)."""

    def __init__(self, name: str = "test-recorder"):
        super().__init__(name=name, level=logging.DEBUG, verbose=3)
        self.records: List[Tuple[str, str, str]] = []

    def debug(self, msg, context="system", verbose_level=3):
        self.records.append(("debug", context, msg))

    def info(self, msg, context="system", verbose_level=1):
        self.records.append(("info", context, msg))

    def warning(self, msg, context="system", verbose_level=1):
        self.records.append(("warning", context, msg))

    def error(self, msg, context="system", verbose_level=0, exc_info=False):
        self.records.append(("error", context, msg))

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [m for lvl, _, m in self.records if level is None or lvl == level]


class FakeListener:
    """
    Listener double recording every call the coordinator makes.

    Args:
        in_flight: Requests in flight when the drain starts
        drained: Result of wait_drained()
        drain_delay: Seconds wait_drained() takes
        close_error: Raised by close()
        begin_drain_error: Raised by begin_drain()
        wait_error: Raised by wait_drained()
    """

    def __init__(
        self,
        in_flight: int = 0,
        drained: bool = True,
        drain_delay: float = 0.0,
        close_error: Optional[Exception] = None,
        begin_drain_error: Optional[Exception] = None,
        wait_error: Optional[Exception] = None,
    ):
        self._state = ListenerState.ACCEPTING
        self._in_flight = in_flight
        self.drained = drained
        self.drain_delay = drain_delay
        self.close_error = close_error
        self.begin_drain_error = begin_drain_error
        self.wait_error = wait_error

        self.events: List[str] = []
        self.close_calls: List[bool] = []
        self.drain_timeouts: List[Optional[float]] = []

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def in_flight(self) -> int:
        return self._in_flight

    def begin_drain(self) -> None:
        self.events.append("begin_drain")
        if self.begin_drain_error is not None:
            raise self.begin_drain_error
        self._state = ListenerState.DRAINING

    async def wait_drained(self, timeout: Optional[float]) -> bool:
        self.events.append("wait_drained")
        self.drain_timeouts.append(timeout)
        if self.drain_delay:
            await asyncio.sleep(self.drain_delay)
        if self.wait_error is not None:
            raise self.wait_error
        if self.drained:
            self._in_flight = 0
        return self.drained

    async def close(self, force: bool = False) -> None:
        self.events.append("close")
        self.close_calls.append(force)
        if self.close_error is not None:
            raise self.close_error
        self._state = ListenerState.STOPPED


class InMemoryOutfitRepository(IOutfitRepository):
    """Outfit repository storing deep copies in a dict."""

    def __init__(self):
        self.outfits: Dict[UUID, Outfit] = {}

    async def create(self, outfit: Outfit) -> Outfit:
        self.outfits[outfit.id] = copy.deepcopy(outfit)
        return copy.deepcopy(outfit)

    async def get_by_id(
        self, outfit_id: UUID, include_deleted: bool = False
    ) -> Optional[Outfit]:
        outfit = self.outfits.get(outfit_id)
        if outfit is None or (outfit.is_deleted and not include_deleted):
            return None
        return copy.deepcopy(outfit)

    async def list(
        self,
        created_by: Optional[str] = None,
        product_id: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Outfit]:
        outfits = [o for o in self.outfits.values() if not o.is_deleted]
        if created_by is not None:
            outfits = [o for o in outfits if o.created_by == created_by]
        if product_id is not None:
            outfits = [o for o in outfits if o.has_product(product_id)]
        outfits.sort(key=lambda o: o.created_at, reverse=True)
        end = None if limit is None else offset + limit
        return [copy.deepcopy(o) for o in outfits[offset:end]]

    async def update(self, outfit: Outfit) -> Outfit:
        if outfit.id not in self.outfits:
            raise EntityNotFoundError("Outfit", str(outfit.id))
        self.outfits[outfit.id] = copy.deepcopy(outfit)
        return copy.deepcopy(outfit)


class InMemoryProductCatalog(IProductCatalog):
    def __init__(self, products: List[ProductSummary]):
        self.products = {p.id: p for p in products}

    async def get_by_id(self, product_id: str) -> Optional[ProductSummary]:
        return self.products.get(product_id)

    async def get_by_ids(self, product_ids: List[str]) -> List[ProductSummary]:
        return [self.products[pid] for pid in product_ids if pid in self.products]


class InMemoryCustomerDirectory(ICustomerDirectory):
    def __init__(self, customer_ids: List[str]):
        self.customer_ids = set(customer_ids)

    async def exists(self, customer_id: str) -> bool:
        return customer_id in self.customer_ids


class RecordingEventPublisher(IEventPublisher):
    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    async def publish(self, event: str, data: Dict[str, Any]) -> None:
        self.events.append((event, data))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]
