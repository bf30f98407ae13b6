"""
Custom APIRouter with response_model_by_alias=False default.

Documents carry their id under the "_id" alias for MongoDB; API responses
use the field name ("id") instead.
"""

from typing import Any

from fastapi import APIRouter
from fastapi.routing import APIRoute


class APIRouteByFieldName(APIRoute):
    """APIRoute that forces response_model_by_alias=False."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["response_model_by_alias"] = False
        super().__init__(*args, **kwargs)


class CustomAPIRouter(APIRouter):
    """
    APIRouter whose routes serialise response models by field name.

    Usage:
        from dragons.api.router import CustomAPIRouter

        router = CustomAPIRouter()
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("route_class", APIRouteByFieldName)
        super().__init__(*args, **kwargs)
