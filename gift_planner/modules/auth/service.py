import logging

from gift_planner.core.exceptions import AuthenticationError
from gift_planner.database.collections import USERS
from gift_planner.database.repository import Repository
from gift_planner.modules.users.schemas import User

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def get_current_user(self, token: str) -> User:
        """
        Get the user a bearer token belongs to.

        Tokens are user ids: the WebAuthn ceremony that issues them lives in
        the identity provider, this service only checks the user exists.
        """
        record = self.repository.get(USERS.name, token)
        if record is None:
            logger.info("Rejected bearer token for unknown user")
            raise AuthenticationError("Invalid token")
        return User.model_validate(record)
