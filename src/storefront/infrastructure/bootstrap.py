"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.config import Settings, get_settings

log = logging.getLogger(__name__)


def build_unit_of_work_factory(settings: Settings) -> Callable[[], UnitOfWork]:
    if settings.store_backend == "mongo":
        from storefront.infrastructure.persistence.mongo_store import MongoDocumentStore

        store = MongoDocumentStore.from_url(settings.mongo_url, settings.mongo_database)
        store.ensure_indexes()
        log.info(f"Using MongoDB store '{settings.mongo_database}'")
        return store.unit_of_work

    from storefront.infrastructure.persistence.json_store import JsonDocumentStore

    json_store = JsonDocumentStore(settings.data_path)
    log.info(f"Using JSON store at {json_store.file_path}")
    return json_store.unit_of_work


@lru_cache
def unit_of_work_factory() -> Callable[[], UnitOfWork]:
    return build_unit_of_work_factory(get_settings())
