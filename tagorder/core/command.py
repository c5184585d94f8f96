# tagorder/core/command.py
"""
Interactive arrange command: pick tags, choose axis and leader style, pick the
start point, then arrange in one transaction. All prompts come before any
mutation, so cancelling never leaves partial changes.
"""

from __future__ import annotations

import logging

from tagorder.core import error_codes
from tagorder.core.arrange import Arranger
from tagorder.core.errors import ArrangeError, UserCancelled
from tagorder.core.interfaces import ConfirmationService, DocumentStore, SelectionService
from tagorder.core.log import get_logger
from tagorder.core.types import (
    ArrangeOutcome,
    ArrangeStatus,
    LeaderStyle,
    PlacementConfig,
    SortAxis,
)

PICK_TAGS_PROMPT = "Select the tags to arrange"
PICK_ORIGIN_PROMPT = "Pick the point where the tags should start"


class ArrangeCommand:
    """One user-facing run of the arrangement."""

    def __init__(
        self,
        document: DocumentStore,
        selection: SelectionService,
        confirmation: ConfirmationService,
        base_config: PlacementConfig | None = None,
        view: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._doc = document
        self._selection = selection
        self._confirmation = confirmation
        self._base = base_config
        self._log = get_logger(__name__, logger)
        self.arranger = Arranger(document, view=view, logger=logger)

    def _cancelled(self, what: str) -> ArrangeOutcome:
        self._log.info("%s cancelled; nothing changed", what)
        return ArrangeOutcome(
            status=ArrangeStatus.CANCELLED,
            reason=error_codes.user_message(error_codes.USER_CANCELLED),
            error_key=error_codes.USER_CANCELLED,
        )

    def _is_tag(self, element_id: str) -> bool:
        return self._doc.get_label(element_id) is not None

    def execute(self) -> ArrangeOutcome:
        self._log.info("Arrange command started")
        try:
            return self._execute()
        finally:
            self._log.info("Arrange command finished")

    def _execute(self) -> ArrangeOutcome:
        label_ids = self._selection.pick_many(self._is_tag, PICK_TAGS_PROMPT)
        if not label_ids:
            return self._cancelled("Tag selection")
        self._log.debug("Selected %d tags: %s", len(label_ids), label_ids)

        default_axis = self._base.axis if self._base else SortAxis.HORIZONTAL
        axis = self._confirmation.choose("Sort axis", list(SortAxis), default=default_axis)
        if axis is None:
            return self._cancelled("Axis choice")
        default_style = self._base.leader_style if self._base else LeaderStyle.STRAIGHT
        style = self._confirmation.choose("Leader style", list(LeaderStyle), default=default_style)
        if style is None:
            return self._cancelled("Leader style choice")

        origin = self._selection.pick_point(PICK_ORIGIN_PROMPT)
        if origin is None:
            return self._cancelled("Start point pick")

        if self._base is None:
            config = PlacementConfig.for_axis(axis, leader_style=style)
        else:
            config = self._base.with_axis(axis, leader_style=style)

        try:
            report = self.arranger.run(label_ids, origin, config)
        except UserCancelled:
            return self._cancelled("Arrangement")
        except ArrangeError as e:
            self._log.error("Arrangement failed: %s", e)
            return ArrangeOutcome(
                status=ArrangeStatus.FAILED,
                reason=str(e),
                error_key=e.error_key,
                config=config,
                origin=origin,
            )
        except Exception as e:
            self._log.error("Unexpected error during arrangement: %s", e, exc_info=True)
            return ArrangeOutcome(
                status=ArrangeStatus.FAILED,
                reason=f"{error_codes.user_message(error_codes.UNEXPECTED_ERROR)} ({e})",
                error_key=error_codes.UNEXPECTED_ERROR,
                config=config,
                origin=origin,
            )

        return ArrangeOutcome(
            status=ArrangeStatus.SUCCEEDED,
            count=report.count,
            report=report,
            config=config,
            origin=origin,
        )
