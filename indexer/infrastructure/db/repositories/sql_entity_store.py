from __future__ import annotations

import logging
from typing import Any, TypeVar

from sqlalchemy import Engine

from indexer.infrastructure.db.engine import build_session_factory, create_schema as create_tables
from indexer.infrastructure.db.mappers.entity_mapper import (
    kind_of,
    map_payload_to_record,
    map_record_to_payload,
)
from indexer.infrastructure.db.models.entities import EntityModel
from indexer.infrastructure.store.identity_map_store import IdentityMapEntityStore


logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class SqlEntityStore(IdentityMapEntityStore):
    def __init__(self, engine: Engine, *, create_schema: bool = False):
        super().__init__()
        self._engine = engine
        self._session_factory = build_session_factory(engine)
        if create_schema:
            create_tables(engine)

    def _read(self, kind: type[RecordT], entity_id: str) -> RecordT | None:
        with self._session_factory() as session:
            row = session.get(EntityModel, (kind.__name__, entity_id))
            if row is None:
                return None
            return map_payload_to_record(row.kind, row.payload)

    def _write(self, records: list[Any]) -> None:
        with self._session_factory.begin() as session:
            for record in records:
                session.merge(
                    EntityModel(
                        kind=kind_of(record),
                        entity_id=record.id,
                        payload=map_record_to_payload(record),
                    )
                )
        logger.info("sql_entity_store: committed rows=%s", len(records))
