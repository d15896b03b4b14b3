import logging
from typing import List

from gift_planner.core.exceptions import NotFoundError
from gift_planner.core.timestamps import now_millis
from gift_planner.database.collections import GROUP_MEMBERS, GROUPS
from gift_planner.database.repository import Repository
from gift_planner.modules.groups.schemas import (
    Group, GroupCreate, GroupUpdate, GroupMember, GroupMemberAdd
)

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def create_group(self, group_data: GroupCreate, user_id: str) -> Group:
        """Create a new group; the creator becomes its first member"""
        record = self.repository.insert(GROUPS.name, {
            **group_data.to_record(),
            "created_at": now_millis(),
            "created_by": user_id,
        })
        self.repository.insert(GROUP_MEMBERS.name, {
            "group_id": record["id"],
            "user_id": user_id,
            "joined_at": now_millis(),
        })
        logger.info("User %s created group %s", user_id, record["id"])
        return Group.model_validate(record)

    def get_group_by_id(self, group_id: str) -> Group:
        record = self.repository.get(GROUPS.name, group_id)
        if record is None:
            raise NotFoundError.for_entity(GROUPS.entity)
        return Group.model_validate(record)

    def update_group(self, group_id: str, group_data: GroupUpdate) -> Group:
        changes = group_data.to_changes("name")
        if not changes:
            return self.get_group_by_id(group_id)
        record = self.repository.update(GROUPS.name, group_id, changes)
        if record is None:
            raise NotFoundError.for_entity(GROUPS.entity)
        return Group.model_validate(record)

    def list_groups(self, user_id: str) -> List[Group]:
        """Groups the user created or is a member of, oldest first"""
        created = self.repository.list(GROUPS.name, {"created_by": user_id})
        memberships = self.repository.list(GROUP_MEMBERS.name, {"user_id": user_id})
        known = {g["id"] for g in created}
        member_of = [m["group_id"] for m in memberships if m["group_id"] not in known]
        joined = self.repository.list(GROUPS.name, ids=list(dict.fromkeys(member_of))) if member_of else []
        groups = [Group.model_validate(g) for g in created + joined]
        return sorted(groups, key=lambda g: g.created_at)

    def delete_group(self, group_id: str) -> bool:
        """Delete group by id; members, events and below are left for the caller to clean up"""
        if not self.repository.delete(GROUPS.name, group_id):
            raise NotFoundError.for_entity(GROUPS.entity)
        return True

    def list_members(self, group_id: str) -> List[GroupMember]:
        return [
            GroupMember.model_validate(m)
            for m in self.repository.list(GROUP_MEMBERS.name, {"group_id": group_id})
        ]

    def add_member(self, group_id: str, member_data: GroupMemberAdd) -> GroupMember:
        """Add a member to the group; adding an existing member returns the existing membership"""
        self.get_group_by_id(group_id)
        existing = self.repository.list(
            GROUP_MEMBERS.name, {"group_id": group_id, "user_id": member_data.user_id}
        )
        if existing:
            return GroupMember.model_validate(existing[0])
        record = self.repository.insert(GROUP_MEMBERS.name, {
            "group_id": group_id,
            "user_id": member_data.user_id,
            "joined_at": now_millis(),
        })
        return GroupMember.model_validate(record)

    def remove_member(self, group_id: str, member_id: str) -> bool:
        """Remove a membership by its id"""
        member = self.repository.get(GROUP_MEMBERS.name, member_id)
        if member is None or member.get("group_id") != group_id:
            raise NotFoundError.for_entity(GROUP_MEMBERS.entity)
        return self.repository.delete(GROUP_MEMBERS.name, member_id)
