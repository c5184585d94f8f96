# tagorder/core/document.py
"""
In-memory drawing document implementing the DocumentStore protocol.
Used by the CLI (loaded from drawing JSON) and by tests.

Each tag has a box size and an offset from its head to the box centre, so the
reported bounds are not centred on the head. Hidden tags have no bounding box.
Mutations are only allowed inside a transaction; rollback restores the snapshot
taken at start.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from tagorder.core.types import (
    BBox,
    HostElement,
    Label,
    LeaderEndCondition,
    Point3,
)


@dataclass(frozen=True)
class TagRecord:
    label: Label
    size: tuple[float, float] | None = None
    box_offset: tuple[float, float] = (0.0, 0.0)
    visible: bool = True


class InMemoryTransaction:
    """Snapshot-based transaction over an InMemoryDocument."""

    def __init__(self, document: "InMemoryDocument", name: str) -> None:
        self._doc = document
        self.name = name
        self._snapshot: dict[str, TagRecord] | None = None
        self.committed = False
        self.rolled_back = False

    def start(self) -> None:
        if self._doc.active_transaction is not None:
            raise RuntimeError(f"Transaction {self._doc.active_transaction.name!r} already open")
        self._snapshot = dict(self._doc._tags)
        self._doc.active_transaction = self

    def has_started(self) -> bool:
        return self._snapshot is not None and not (self.committed or self.rolled_back)

    def commit(self) -> None:
        if not self.has_started():
            raise RuntimeError("Cannot commit: transaction not started")
        self._doc._before_commit(self)
        self.committed = True
        self._doc.active_transaction = None
        self._doc.commit_count += 1

    def rollback(self) -> None:
        if not self.has_started():
            raise RuntimeError("Cannot roll back: transaction not started")
        self._doc._tags = dict(self._snapshot or {})
        self.rolled_back = True
        self._doc.active_transaction = None


class InMemoryDocument:
    """Tags and host elements of one drawing view."""

    def __init__(self, units: str = "mm", view: str | None = None) -> None:
        self.units = units
        self.view = view
        self._tags: dict[str, TagRecord] = {}
        self._hosts: dict[str, HostElement] = {}
        self.active_transaction: InMemoryTransaction | None = None
        self.commit_count = 0

    # ----- building -----

    def add_host(self, element: HostElement) -> None:
        self._hosts[element.element_id] = element

    def add_tag(
        self,
        label: Label,
        size: tuple[float, float] | None = None,
        box_offset: tuple[float, float] = (0.0, 0.0),
        visible: bool = True,
    ) -> None:
        if size is not None and (size[0] < 0 or size[1] < 0):
            raise ValueError(f"Tag {label.label_id}: negative size {size}")
        self._tags[label.label_id] = TagRecord(label, size, box_offset, visible)

    # ----- queries -----

    def label_ids(self) -> list[str]:
        return list(self._tags)

    def host_ids(self) -> list[str]:
        return list(self._hosts)

    def is_tag(self, element_id: str) -> bool:
        return element_id in self._tags

    def tag_record(self, label_id: str) -> TagRecord | None:
        return self._tags.get(label_id)

    def get_label(self, label_id: str) -> Label | None:
        rec = self._tags.get(label_id)
        return rec.label if rec is not None else None

    def get_element(self, element_id: str) -> HostElement | None:
        return self._hosts.get(element_id)

    def bounding_box(self, label_id: str, view: str | None = None) -> BBox | None:
        rec = self._tags.get(label_id)
        if rec is None or not rec.visible or rec.size is None:
            return None
        hx, hy, _ = rec.label.head_position
        cx = hx + rec.box_offset[0]
        cy = hy + rec.box_offset[1]
        w, h = rec.size
        return BBox(cx - w / 2.0, cy - h / 2.0, cx + w / 2.0, cy + h / 2.0)

    # ----- mutation -----

    def _require_transaction(self) -> None:
        if self.active_transaction is None:
            raise RuntimeError("Document modification outside a transaction")

    def _record(self, label_id: str) -> TagRecord:
        rec = self._tags.get(label_id)
        if rec is None:
            raise KeyError(f"Tag {label_id} not found")
        return rec

    def set_head_position(self, label_id: str, point: Point3) -> None:
        self._require_transaction()
        rec = self._record(label_id)
        self._tags[label_id] = replace(rec, label=replace(rec.label, head_position=tuple(point)))

    def set_leader(
        self,
        label_id: str,
        end_condition: LeaderEndCondition,
        end_point: Point3,
        elbow: Point3 | None = None,
    ) -> None:
        self._require_transaction()
        rec = self._record(label_id)
        if not rec.label.has_leader:
            raise ValueError(f"Tag {label_id} has no leader")
        label = replace(
            rec.label,
            leader_end_condition=end_condition,
            leader_end=tuple(end_point),
            leader_elbow=tuple(elbow) if elbow is not None else None,
        )
        self._tags[label_id] = replace(rec, label=label)

    def transaction(self, name: str) -> InMemoryTransaction:
        return InMemoryTransaction(self, name)

    def _before_commit(self, txn: InMemoryTransaction) -> None:
        """Hook for subclasses that need to veto a commit by raising."""
