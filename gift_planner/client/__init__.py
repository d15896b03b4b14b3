from gift_planner.client.api_client import ApiClient, ApiError, ApiResponseParseError
from gift_planner.client.api import GiftPlannerApi, transform_user

__all__ = ["ApiClient", "ApiError", "ApiResponseParseError", "GiftPlannerApi", "transform_user"]
