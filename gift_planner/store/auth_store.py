import logging
from typing import Optional

from pydantic import BaseModel

from gift_planner.store.storage import KeyValueStorage
from gift_planner.store.store import Store

logger = logging.getLogger(__name__)

USER_ID_KEY = "gift-planner-user-id"
USER_NAME_KEY = "gift-planner-user-name"
USER_EMAIL_KEY = "gift-planner-user-email"


class AuthUser(BaseModel):
    id: str
    name: str
    email: str = ""


class AuthState(BaseModel):
    user: Optional[AuthUser] = None
    is_authenticated: bool = False
    is_loading: bool = True


class AuthStore(Store[AuthState]):
    """Signed-in user state, mirrored to ``gift-planner-user-*`` storage keys"""

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        super().__init__(AuthState())
        self.storage = storage
        self.set_state(self._load())

    def _load(self) -> AuthState:
        if self.storage is None:
            return AuthState(is_loading=False)
        user_id = self.storage.get_item(USER_ID_KEY)
        if not user_id:
            return AuthState(is_loading=False)
        user = AuthUser(
            id=user_id,
            name=self.storage.get_item(USER_NAME_KEY) or "",
            email=self.storage.get_item(USER_EMAIL_KEY) or "",
        )
        logger.debug("Restored session for user %s", user_id)
        return AuthState(user=user, is_authenticated=True, is_loading=False)

    def login(self, user_id: str, user_name: str, user_email: str = "") -> AuthState:
        if self.storage is not None:
            self.storage.set_item(USER_ID_KEY, user_id)
            self.storage.set_item(USER_NAME_KEY, user_name)
            self.storage.set_item(USER_EMAIL_KEY, user_email)
        return self.set_state(
            AuthState(
                user=AuthUser(id=user_id, name=user_name, email=user_email),
                is_authenticated=True,
                is_loading=False,
            )
        )

    def logout(self) -> AuthState:
        if self.storage is not None:
            for key in (USER_ID_KEY, USER_NAME_KEY, USER_EMAIL_KEY):
                self.storage.remove_item(key)
        return self.set_state(AuthState(is_loading=False))

    def set_loading(self, is_loading: bool) -> AuthState:
        return self.set_state(lambda state: state.model_copy(update={"is_loading": is_loading}))
