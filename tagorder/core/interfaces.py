# tagorder/core/interfaces.py
"""
Collaborator interfaces consumed by the arrangement core.
The host document, point picking and choice dialogs live outside the core;
anything satisfying these protocols can be passed in.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol, Sequence, TypeVar

from tagorder.core.types import (
    BBox,
    HostElement,
    Label,
    LeaderEndCondition,
    Point3,
)

E = TypeVar("E", bound=Enum)


class Transaction(Protocol):
    """One atomic unit of document mutation, owned by the document."""

    def start(self) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def has_started(self) -> bool: ...


class DocumentStore(Protocol):
    """Element storage and geometry queries. The only shared mutable resource."""

    def get_label(self, label_id: str) -> Label | None: ...

    def get_element(self, element_id: str) -> HostElement | None: ...

    def bounding_box(self, label_id: str, view: str | None = None) -> BBox | None: ...

    def set_head_position(self, label_id: str, point: Point3) -> None: ...

    def set_leader(
        self,
        label_id: str,
        end_condition: LeaderEndCondition,
        end_point: Point3,
        elbow: Point3 | None = None,
    ) -> None: ...

    def transaction(self, name: str) -> Transaction: ...


class SelectionService(Protocol):
    """Interactive picking. None means the user cancelled."""

    def pick_point(self, prompt: str) -> Point3 | None: ...

    def pick_many(self, accept: Callable[[str], bool], prompt: str) -> list[str] | None: ...


class ConfirmationService(Protocol):
    """Small enumerated choice (axis, leader style). None means cancelled."""

    def choose(self, title: str, options: Sequence[E], default: E | None = None) -> E | None: ...
