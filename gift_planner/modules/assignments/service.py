import logging
from typing import List

from gift_planner.core.exceptions import NotFoundError
from gift_planner.core.timestamps import now_millis
from gift_planner.database.collections import GIFT_ASSIGNMENTS
from gift_planner.database.repository import Repository
from gift_planner.modules.assignments.schemas import (
    GiftAssignment, GiftAssignmentCreate, GiftAssignmentUpdate
)

logger = logging.getLogger(__name__)


class AssignmentService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def list_assignments(self, gift_id: str) -> List[GiftAssignment]:
        assignments = [
            GiftAssignment.model_validate(a)
            for a in self.repository.list(GIFT_ASSIGNMENTS.name, {"gift_id": gift_id})
        ]
        return sorted(assignments, key=lambda a: a.assigned_at)

    def create_assignment(self, gift_id: str, assignment_data: GiftAssignmentCreate, user_id: str) -> GiftAssignment:
        """Assign a gift to the user who will buy it"""
        record = self.repository.insert(GIFT_ASSIGNMENTS.name, {
            "gift_id": gift_id,
            "assigned_to_user_id": assignment_data.assigned_to_user_id,
            "assigned_at": now_millis(),
            "assigned_by": user_id,
            "is_purchased": False,
        })
        logger.info("Gift %s assigned to %s", gift_id, assignment_data.assigned_to_user_id)
        return GiftAssignment.model_validate(record)

    def get_assignment_by_id(self, assignment_id: str) -> GiftAssignment:
        record = self.repository.get(GIFT_ASSIGNMENTS.name, assignment_id)
        if record is None:
            raise NotFoundError.for_entity(GIFT_ASSIGNMENTS.entity)
        return GiftAssignment.model_validate(record)

    def update_assignment(self, assignment_id: str, assignment_data: GiftAssignmentUpdate) -> GiftAssignment:
        """
        Update purchase status.

        Marking an assignment as purchased stamps ``purchased_at`` with the
        current time unless it is already set or given explicitly.
        """
        current = self.get_assignment_by_id(assignment_id)
        changes = assignment_data.to_changes("is_purchased")
        if changes.get("is_purchased") and current.purchased_at is None and changes.get("purchased_at") is None:
            changes["purchased_at"] = now_millis()
        if not changes:
            return current
        record = self.repository.update(GIFT_ASSIGNMENTS.name, assignment_id, changes)
        if record is None:
            raise NotFoundError.for_entity(GIFT_ASSIGNMENTS.entity)
        return GiftAssignment.model_validate(record)

    def delete_assignment(self, assignment_id: str) -> bool:
        if not self.repository.delete(GIFT_ASSIGNMENTS.name, assignment_id):
            raise NotFoundError.for_entity(GIFT_ASSIGNMENTS.entity)
        return True
