# tagorder/core/arrange.py
"""
Arrangement orchestration: resolve anchors, sort, place, reconnect leaders,
all inside one document transaction.

State machine:
    IDLE -> VALIDATING -> SORTING -> PLACING -> RECONNECTING -> COMMITTED
with ROLLED_BACK reachable from any state on a fatal error.
Per-tag problems are logged and skipped (partial success) unless the config
is strict, in which case the first one rolls the whole batch back.
"""

from __future__ import annotations

import logging
from enum import Enum

from tagorder.core import error_codes
from tagorder.core.anchors import AnchorResolver
from tagorder.core.bounds import BoundsCalculator
from tagorder.core.config import TRANSACTION_NAME
from tagorder.core.errors import CommitError, NoValidLabelsError, StrictModeAbort, ValidationError
from tagorder.core.interfaces import DocumentStore, Transaction
from tagorder.core.leaders import LeaderConnector
from tagorder.core.log import get_logger
from tagorder.core.placement import PlacementEngine
from tagorder.core.sorter import LabelSorter
from tagorder.core.types import (
    ArrangeReport,
    LabelIssue,
    Placement,
    PlacementConfig,
    Point3,
)


class ArrangeState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SORTING = "sorting"
    PLACING = "placing"
    RECONNECTING = "reconnecting"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class Arranger:
    """Runs one arrangement operation against a document."""

    def __init__(
        self,
        document: DocumentStore,
        view: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._doc = document
        self._view = view
        self._logger = logger
        self._log = get_logger(__name__, logger)
        self.state = ArrangeState.IDLE
        self.history: list[ArrangeState] = [ArrangeState.IDLE]
        self.last_report: ArrangeReport | None = None

    def _enter(self, state: ArrangeState) -> None:
        self._log.debug("State %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def arrange(
        self,
        label_ids: list[str] | None,
        origin: Point3 | None,
        config: PlacementConfig,
    ) -> int:
        """Arrange the tags; returns how many were placed. Fatal errors raise ArrangeError."""
        return self.run(label_ids, origin, config).count

    def run(
        self,
        label_ids: list[str] | None,
        origin: Point3 | None,
        config: PlacementConfig,
    ) -> ArrangeReport:
        """Like arrange() but returns the full report."""
        self.state = ArrangeState.IDLE
        self.history = [ArrangeState.IDLE]
        self.last_report = None

        self._enter(ArrangeState.VALIDATING)
        if not label_ids:
            self._enter(ArrangeState.ROLLED_BACK)
            raise ValidationError(error_key=error_codes.EMPTY_SELECTION)
        if origin is None:
            self._enter(ArrangeState.ROLLED_BACK)
            raise ValidationError(error_key=error_codes.NULL_ORIGIN)

        txn = self._doc.transaction(TRANSACTION_NAME)
        txn.start()
        try:
            report = self._run_steps(list(label_ids), origin, config)
        except BaseException:
            self._rollback(txn)
            raise

        try:
            txn.commit()
        except Exception as e:
            self._log.error("Commit failed: %s", e)
            self._rollback(txn)
            raise CommitError(f"commit failed: {e}") from e

        self._enter(ArrangeState.COMMITTED)
        self.last_report = report
        self._log.success("Arranged %d of %d tags", report.count, len(label_ids))
        return report

    def _rollback(self, txn: Transaction) -> None:
        if txn.has_started():
            txn.rollback()
        self._enter(ArrangeState.ROLLED_BACK)
        self._log.info("Arrangement rolled back")

    def _run_steps(self, label_ids: list[str], origin: Point3, config: PlacementConfig) -> ArrangeReport:
        report = ArrangeReport()
        resolver = AnchorResolver(self._doc, logger=self._logger)
        bounds = BoundsCalculator(self._doc, view=self._view, logger=self._logger)

        self._enter(ArrangeState.SORTING)
        resolved, issues = resolver.resolve_all(label_ids)
        report.issues.extend(issues)
        if not resolved:
            raise NoValidLabelsError()
        if config.strict and issues:
            raise StrictModeAbort(f"{len(issues)} selected tag(s) could not be resolved")
        report.before = {r.label.label_id: r.label.head_position for r in resolved}
        plan = LabelSorter(logger=self._logger).sort(resolved, config.axis, origin)
        report.plan = plan

        self._enter(ArrangeState.PLACING)

        def move(placement: Placement) -> None:
            self._doc.set_head_position(placement.label.label_id, placement.head)

        outcome = PlacementEngine(bounds, logger=self._logger).place(plan, origin, config, on_placed=move)
        report.placed = outcome.placements
        report.issues.extend(outcome.issues)

        self._enter(ArrangeState.RECONNECTING)
        connector = LeaderConnector(self._doc, axis=config.axis, logger=self._logger)
        for placement in report.placed:
            label_id = placement.label.label_id
            try:
                fresh = self._doc.get_label(label_id)
                if fresh is None:
                    raise LookupError(f"tag {label_id} vanished after move")
                anchor = resolver.resolve(fresh)
                if connector.reconnect(fresh, anchor, config.leader_style):
                    report.reconnected += 1
            except Exception as e:
                if config.strict:
                    raise StrictModeAbort(f"leader of tag {label_id} could not be reconnected: {e}") from e
                self._log.warning("Tag %s leader skipped: %s", label_id, e)
                report.issues.append(LabelIssue(label_id, error_codes.LEADER_FAILED, str(e)))

        report.issues.extend(bounds.issues)
        return report
