"""Notification builders for common domain events.

Each builder looks up the display data it needs, builds the notification
and creates it through the service (which persists and publishes it).
When a referenced user or profile is missing the builder logs and returns
``None`` without creating anything.

Usage:
    factory = NotificationFactory(service, users, profiles)
    factory.badge_earned(profile_id, "Early Adopter", "Joined in beta", "🏅")
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import (
    Notification,
    NotificationPriority,
    NotificationType,
    RelatedModel,
)

if TYPE_CHECKING:
    from infrastructure.persistence.profiles import Profile, ProfileRepository
    from infrastructure.persistence.users import UserRepository
    from modules.notifications.service import NotificationService

logger = get_module_logger()

USER_NAME_FIELDS = ("firstName", "lastName")


def _full_name(user: Dict[str, Any]) -> str:
    return f"{user.get('firstName', '')} {user.get('lastName', '')}".strip()


class NotificationFactory:
    """Stateless builders, one per domain event kind."""

    def __init__(
        self,
        service: "NotificationService",
        users: "UserRepository",
        profiles: "ProfileRepository",
    ):
        self._service = service
        self._users = users
        self._profiles = profiles

    def profile_viewed(
        self, profile_id: str, viewer_id: str, owner_id: str
    ) -> Optional[Notification]:
        viewer = self._find_user(viewer_id, "profile_view")
        if viewer is None:
            return None
        return self._create(
            recipient=owner_id,
            type=NotificationType.PROFILE_VIEW,
            title="New Profile View",
            message=f"{_full_name(viewer)} viewed your profile",
            relatedTo={"model": RelatedModel.PROFILE, "id": profile_id},
            priority=NotificationPriority.LOW,
        )

    def connection_requested(
        self, requester_id: str, recipient_id: str
    ) -> Optional[Notification]:
        requester = self._find_user(requester_id, "connection_request")
        if requester is None:
            return None
        return self._create(
            recipient=recipient_id,
            type=NotificationType.CONNECTION_REQUEST,
            title="New Connection Request",
            message=f"{_full_name(requester)} wants to connect with you",
            relatedTo={"model": RelatedModel.USER, "id": requester_id},
            action={
                "text": "View Request",
                "url": f"/connections/requests/{requester_id}",
            },
            priority=NotificationPriority.MEDIUM,
        )

    def profile_connection_requested(
        self, requester_profile_id: str, receiver_profile_id: str, connection_id: str
    ) -> Optional[Notification]:
        requester = self._profiles.find_by_id(
            requester_profile_id, ("name", "profileImage", "owner")
        )
        receiver = self._profiles.find_by_id(receiver_profile_id, ("name", "owner"))
        if requester is None or receiver is None or not receiver.owner:
            logger.info(
                "notification_skipped_missing_profile",
                kind="profile_connection_request",
                requester_profile_id=requester_profile_id,
                receiver_profile_id=receiver_profile_id,
            )
            return None

        return self._create(
            recipient=receiver.owner,
            type=NotificationType.PROFILE_CONNECTION_REQUEST,
            title="New Profile Connection Request",
            message=(
                f"{requester.name} wants to connect with your profile {receiver.name}"
            ),
            relatedTo={"model": RelatedModel.PROFILE_CONNECTION, "id": connection_id},
            action={
                "text": "View Request",
                "url": f"/profiles/{receiver_profile_id}/connections/requests",
            },
            priority=NotificationPriority.MEDIUM,
            metadata={
                "requesterProfileId": requester_profile_id,
                "receiverProfileId": receiver_profile_id,
                "connectionId": connection_id,
                "requesterProfileName": requester.name,
                "requesterProfileImage": requester.profile_image,
            },
        )

    def profile_connection_accepted(
        self, requester_profile_id: str, receiver_profile_id: str, connection_id: str
    ) -> Optional[Notification]:
        requester = self._profiles.find_by_id(requester_profile_id, ("name", "owner"))
        receiver = self._profiles.find_by_id(
            receiver_profile_id, ("name", "profileImage", "owner")
        )
        if requester is None or receiver is None or not requester.owner:
            logger.info(
                "notification_skipped_missing_profile",
                kind="profile_connection_accepted",
                requester_profile_id=requester_profile_id,
                receiver_profile_id=receiver_profile_id,
            )
            return None

        return self._create(
            recipient=requester.owner,
            type=NotificationType.PROFILE_CONNECTION_ACCEPTED,
            title="Profile Connection Accepted",
            message=f"{receiver.name} has accepted your connection request",
            relatedTo={"model": RelatedModel.PROFILE_CONNECTION, "id": connection_id},
            action={"text": "View Profile", "url": f"/profiles/{receiver_profile_id}"},
            priority=NotificationPriority.MEDIUM,
            metadata={
                "requesterProfileId": requester_profile_id,
                "receiverProfileId": receiver_profile_id,
                "connectionId": connection_id,
                "receiverProfileName": receiver.name,
                "receiverProfileImage": receiver.profile_image,
            },
        )

    def endorsement_received(
        self, endorser_id: str, recipient_id: str, skill: str
    ) -> Optional[Notification]:
        endorser = self._find_user(endorser_id, "endorsement_received")
        if endorser is None:
            return None
        return self._create(
            recipient=recipient_id,
            type=NotificationType.ENDORSEMENT_RECEIVED,
            title="New Skill Endorsement",
            message=f"{_full_name(endorser)} endorsed you for {skill}",
            relatedTo={"model": RelatedModel.USER, "id": endorser_id},
            priority=NotificationPriority.MEDIUM,
        )

    def badge_earned(
        self,
        profile_id: str,
        badge_name: str,
        badge_description: str,
        badge_icon: str,
    ) -> Optional[Notification]:
        owner_id = self._profile_creator(profile_id, "badge_earned")
        if owner_id is None:
            return None
        return self._create(
            recipient=owner_id,
            type=NotificationType.BADGE_EARNED,
            title="New Badge Earned",
            message=f"Congratulations! You've earned the {badge_name} badge.",
            relatedTo={"model": RelatedModel.PROFILE, "id": profile_id},
            action={"text": "View Badges", "url": "/dashboard/badges"},
            priority=NotificationPriority.MEDIUM,
            metadata={
                "badgeName": badge_name,
                "badgeDescription": badge_description,
                "badgeIcon": badge_icon,
                "profileId": profile_id,
            },
        )

    def badge_suggestion_approved(
        self, profile_id: str, badge_name: str
    ) -> Optional[Notification]:
        owner_id = self._profile_creator(profile_id, "badge_suggestion_approved")
        if owner_id is None:
            return None
        return self._create(
            recipient=owner_id,
            type=NotificationType.BADGE_SUGGESTION_APPROVED,
            title="Badge Suggestion Approved",
            message=(
                f'Your suggestion for the "{badge_name}" badge has been approved '
                "and is under review for implementation."
            ),
            relatedTo={"model": RelatedModel.PROFILE, "id": profile_id},
            action={"text": "View Suggestions", "url": "/dashboard/badge-suggestions"},
            priority=NotificationPriority.MEDIUM,
            metadata={"badgeName": badge_name, "profileId": profile_id},
        )

    def badge_suggestion_rejected(
        self, profile_id: str, badge_name: str, feedback: str
    ) -> Optional[Notification]:
        owner_id = self._profile_creator(profile_id, "badge_suggestion_rejected")
        if owner_id is None:
            return None
        return self._create(
            recipient=owner_id,
            type=NotificationType.BADGE_SUGGESTION_REJECTED,
            title="Badge Suggestion Not Approved",
            message=(
                f'Your suggestion for the "{badge_name}" badge was not approved. '
                f"Admin feedback: {feedback}"
            ),
            relatedTo={"model": RelatedModel.PROFILE, "id": profile_id},
            action={"text": "View Suggestions", "url": "/dashboard/badge-suggestions"},
            priority=NotificationPriority.MEDIUM,
            metadata={
                "badgeName": badge_name,
                "feedback": feedback,
                "profileId": profile_id,
            },
        )

    def badge_suggestion_implemented(
        self, profile_id: str, badge_name: str
    ) -> Optional[Notification]:
        owner_id = self._profile_creator(profile_id, "badge_suggestion_implemented")
        if owner_id is None:
            return None
        return self._create(
            recipient=owner_id,
            type=NotificationType.BADGE_SUGGESTION_IMPLEMENTED,
            title="Badge Suggestion Implemented",
            message=(
                f'Great news! Your suggestion for the "{badge_name}" badge has been '
                "implemented and is now available in the system."
            ),
            relatedTo={"model": RelatedModel.PROFILE, "id": profile_id},
            action={"text": "View Badges", "url": "/dashboard/badges"},
            priority=NotificationPriority.HIGH,
            metadata={"badgeName": badge_name, "profileId": profile_id},
        )

    def milestone_achieved(
        self, profile_id: str, milestone_level: str, current_points: int
    ) -> Optional[Notification]:
        owner_id = self._profile_creator(profile_id, "milestone_achieved")
        if owner_id is None:
            return None
        return self._create(
            recipient=owner_id,
            type=NotificationType.MILESTONE_ACHIEVED,
            title="New Milestone Achieved",
            message=(
                f"Congratulations! You've reached the {milestone_level} level "
                f"with {current_points} MyPts."
            ),
            relatedTo={"model": RelatedModel.PROFILE, "id": profile_id},
            action={"text": "View Milestones", "url": "/dashboard/milestones"},
            priority=NotificationPriority.HIGH,
            metadata={
                "milestoneLevel": milestone_level,
                "currentPoints": current_points,
                "profileId": profile_id,
            },
        )

    def _find_user(self, user_id: str, kind: str) -> Optional[Dict[str, Any]]:
        user = self._users.find_by_id(user_id, USER_NAME_FIELDS)
        if user is None:
            logger.info("notification_skipped_missing_user", kind=kind, user_id=user_id)
        return user

    def _profile_creator(self, profile_id: str, kind: str) -> Optional[str]:
        profile: Optional["Profile"] = self._profiles.find_by_id(
            profile_id, ("profileInformation.creator",)
        )
        if profile is None or not profile.creator:
            logger.warning(
                "notification_skipped_missing_profile_owner",
                kind=kind,
                profile_id=profile_id,
            )
            return None
        return profile.creator

    def _create(self, **fields: Any) -> Notification:
        return self._service.create_notification(Notification.model_validate(fields))
