class GiftPlannerError(Exception):
    """A base class for Gift Planner exceptions.

    Attributes:
        message -- human readable explanation, shown to the user as is
        status_code -- HTTP status used when the error reaches the API layer
    """

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self):
        return str(self.message)


class NotFoundError(GiftPlannerError):
    status_code = 404

    @classmethod
    def for_entity(cls, entity: str) -> "NotFoundError":
        return cls(f"{entity} not found")


class ValidationError(GiftPlannerError):
    """Raised when data coming from a backend or a caller can not be normalized"""

    status_code = 400

    def __init__(self, message, field=None, status_code=None):
        super().__init__(message, status_code)
        self.field = field


class AuthenticationError(GiftPlannerError):
    status_code = 401


class DuplicateKeyError(GiftPlannerError):
    status_code = 409
