"""
Permission classes for the CitizenVote API.

The public dashboards (party progress, candidate leaderboard, candidate page)
are readable without logging in. Other reads need an authenticated user.
Writes to campaign data, and the admin listings, require a campaign
administrator (a staff user).
"""

import logging

from rest_framework.permissions import SAFE_METHODS, BasePermission
from rest_framework.request import Request
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


def is_campaign_admin(user) -> bool:
    return bool(user and user.is_authenticated and user.is_staff)


class IsCampaignAdmin(BasePermission):
    """Allow only authenticated staff users."""

    message = "Campaign administrator access required"

    def has_permission(self, request: Request, view: APIView) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False

        if not is_campaign_admin(user):
            logger.warning(
                f"Access denied: User {user.get_username()} attempted "
                f"{request.method} {request.path} without admin rights"
            )
            return False

        logger.debug(
            f"Access granted: User {user.get_username()} "
            f"{request.method} {request.path}"
        )
        return True


class IsCampaignAdminOrReadOnly(IsCampaignAdmin):
    """Authenticated users may read; only campaign administrators may write."""

    def has_permission(self, request: Request, view: APIView) -> bool:
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)


class IsCampaignAdminOrPublicRead(IsCampaignAdmin):
    """Anyone may read, including anonymous visitors; writes need an admin."""

    def has_permission(self, request: Request, view: APIView) -> bool:
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
