"""Shared plumbing for the fantasy services."""

from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel

from ...config.logging import get_logger
from ..api_client import ApiClient

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class FantasyService:
    """Base class binding a service to an ``ApiClient``."""

    name = "fantasy_service"

    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or ApiClient()
        self.logger = logger.bind(service=self.name)

    @staticmethod
    def parse(model: Type[ModelT], data: Any) -> Optional[ModelT]:
        return None if data is None else model.model_validate(data)

    @staticmethod
    def parse_list(model: Type[ModelT], data: Any) -> List[ModelT]:
        return [model.model_validate(item) for item in data or []]
