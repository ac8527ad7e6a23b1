from __future__ import annotations

from typing import Any


class ImpactEngineError(Exception):
    pass


class InvalidInput(ImpactEngineError, ValueError):
    def __init__(self, field: str, value: Any, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"{field} must be positive, got {value!r}")


class EntityNotFound(ImpactEngineError, KeyError):
    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(entity_id)

    def __str__(self) -> str:
        return f"Entity {self.entity_id} not found"
