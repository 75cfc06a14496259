from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class EntityNotFoundError(DomainError):
    """A record the handler expects to pre-exist is missing."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class BundleNotFoundError(EntityNotFoundError):
    def __init__(self, entity_id: str):
        super().__init__("Bundle", entity_id)


class FactoryNotFoundError(EntityNotFoundError):
    def __init__(self, entity_id: str):
        super().__init__("Factory", entity_id)


class PoolNotFoundError(EntityNotFoundError):
    def __init__(self, entity_id: str):
        super().__init__("Pool", entity_id)


class TokenNotFoundError(EntityNotFoundError):
    def __init__(self, entity_id: str):
        super().__init__("Token", entity_id)


class UnsupportedEventError(DomainError):
    """No handler registered for the event type."""
