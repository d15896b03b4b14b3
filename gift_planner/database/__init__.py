import logging

from gift_planner.config import settings
from gift_planner.database.repository import Repository

logger = logging.getLogger(__name__)

_repository: Repository = None


def create_repository(backend: str = None) -> Repository:
    """Build the repository for ``backend`` (defaults to ``settings.data_backend``)"""
    backend = (backend or settings.data_backend).lower()
    if backend == "supabase":
        from gift_planner.database.supabase_client import SupabaseRepository
        return SupabaseRepository()
    if backend == "firestore":
        from gift_planner.database.firestore_client import FirestoreRepository
        return FirestoreRepository()
    if backend == "local":
        from gift_planner.database.local_client import LocalRepository
        return LocalRepository()
    raise ValueError(f"Unknown data backend: {backend}")


def get_repository() -> Repository:
    global _repository
    if _repository is None:
        _repository = create_repository()
        logger.info("Using %s data backend", _repository.backend_name)
    return _repository


def set_repository(repository: Repository) -> None:
    global _repository
    _repository = repository
