import logging
from typing import List, Optional

from gift_planner.core.exceptions import DuplicateKeyError, NotFoundError
from gift_planner.core.timestamps import now_millis
from gift_planner.database.collections import USERS
from gift_planner.database.repository import Repository
from gift_planner.modules.users.schemas import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    return email.strip().lower() or None


class UserService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def _ensure_email_free(self, email: Optional[str], user_id: Optional[str] = None) -> None:
        if not email:
            return
        for existing in self.repository.list(USERS.name, {"email": email}):
            if existing["id"] != user_id:
                raise DuplicateKeyError("User with this email already exists")

    def create_user(self, user_data: UserCreate, user_id: Optional[str] = None) -> User:
        """Create a user; ``user_id`` lets an identity provider's uid be reused as the id"""
        email = normalize_email(user_data.email)
        self._ensure_email_free(email)
        record = {
            "name": user_data.name,
            "email": email,
            "created_at": now_millis(),
        }
        if user_id:
            record["id"] = user_id
        created = self.repository.insert(USERS.name, {k: v for k, v in record.items() if v is not None})
        logger.info("Created user %s", created["id"])
        return User.model_validate(created)

    def list_users(self) -> List[User]:
        return [User.model_validate(r) for r in self.repository.list(USERS.name)]

    def get_user_by_id(self, user_id: str) -> User:
        record = self.repository.get(USERS.name, user_id)
        if record is None:
            raise NotFoundError.for_entity(USERS.entity)
        return User.model_validate(record)

    def update_user(self, user_id: str, user_data: UserUpdate) -> User:
        """Update user; only the provided fields are overwritten"""
        self.get_user_by_id(user_id)
        update_data = user_data.to_changes("name")
        if "email" in update_data:
            update_data["email"] = normalize_email(update_data["email"])
            self._ensure_email_free(update_data["email"], user_id)
        if not update_data:
            return self.get_user_by_id(user_id)
        record = self.repository.update(USERS.name, user_id, update_data)
        if record is None:
            raise NotFoundError.for_entity(USERS.entity)
        return User.model_validate(record)
