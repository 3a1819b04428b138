"""Follow use cases."""

from .follow import FollowRequest, FollowResponse, FollowUseCase
from .unfollow import UnfollowRequest, UnfollowResponse, UnfollowUseCase

__all__ = [
    "FollowRequest",
    "FollowResponse",
    "FollowUseCase",
    "UnfollowRequest",
    "UnfollowResponse",
    "UnfollowUseCase",
]
