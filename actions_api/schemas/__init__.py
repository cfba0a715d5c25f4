from .actions import (
    ActionError,
    ActionGetResponse,
    ActionLinks,
    ActionParameter,
    ActionPostRequest,
    ActionPostResponse,
    LinkedAction,
)
from .asset import TokenAsset

__all__ = [
    "ActionError",
    "ActionGetResponse",
    "ActionLinks",
    "ActionParameter",
    "ActionPostRequest",
    "ActionPostResponse",
    "LinkedAction",
    "TokenAsset",
]
