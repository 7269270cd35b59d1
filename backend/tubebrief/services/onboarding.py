"""
Onboarding wizard and notification preference persistence.

New users go through a two-step wizard before they see their channels:

    Step 1 (COLLECTING_DESTINATION)
        pick email or WhatsApp, type the address
            │ submit_destination() - destination must validate
            ▼
    Step 2 (COLLECTING_CATEGORIES)
        tick at least one content category
            │ submit_categories() - exactly one save_preference() call
            ▼
    COMMITTED

back() returns from step 2 to step 1 keeping what was typed. restart()
re-opens a committed wizard for editing. Guard failures never raise:
the flow stays where it is and ``error`` holds the message to show.
Calling a transition from the wrong step raises OnboardingStateError.

The flow holds no database handle. Persistence is injected as
``save_preference(user_id, channel_type, destination, categories)``;
the API binds it to save_notification_preference() with
functools.partial.
"""

import enum
import logging
from typing import Awaitable, Callable, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tubebrief.core.exceptions import OnboardingStateError
from tubebrief.db.base import utcnow
from tubebrief.db.upsert import insert_or_update
from tubebrief.models.user import ContentCategory, NotificationChannel, NotificationPreference
from tubebrief.services.validation import ChannelKind, destination_error, normalize_destination

logger = logging.getLogger(__name__)

NO_CATEGORY_MESSAGE = "Please select at least one category"

SavePreference = Callable[
    [str, NotificationChannel, str, List[str]],
    Awaitable[NotificationPreference],
]


class OnboardingStep(str, enum.Enum):
    """Wizard steps."""

    COLLECTING_DESTINATION = "collecting_destination"
    COLLECTING_CATEGORIES = "collecting_categories"
    COMMITTED = "committed"

    def __str__(self) -> str:
        return self.value


def clean_categories(categories: Iterable[str]) -> List[str]:
    """
    De-duplicate category tags, keeping first-seen order.

    Raises:
        ValueError: naming the first tag that is not a ContentCategory
    """
    cleaned: List[str] = []
    for tag in categories:
        try:
            value = ContentCategory(tag).value
        except ValueError:
            raise ValueError(f"Unknown category: {tag}") from None
        if value not in cleaned:
            cleaned.append(value)
    return cleaned


class OnboardingFlow:
    """
    State machine for the preference wizard.

    Example:
        >>> flow = OnboardingFlow(user.id, partial(save_notification_preference, db))
        >>> flow.submit_destination("alice@example.com", "email")
        True
        >>> await flow.submit_categories(["tech", "science"])
        True
        >>> flow.step
        <OnboardingStep.COMMITTED: 'committed'>
    """

    def __init__(
        self,
        user_id: str,
        save_preference: SavePreference,
        channel_type: ChannelKind = NotificationChannel.EMAIL,
        destination: str = "",
        categories: Optional[Iterable[str]] = None,
    ):
        self.user_id = user_id
        self.save_preference = save_preference
        self.step = OnboardingStep.COLLECTING_DESTINATION
        self.channel_type = NotificationChannel(channel_type)
        self.destination = destination
        self.categories: List[str] = clean_categories(categories or [])
        self.error: Optional[str] = None
        self.preference: Optional[NotificationPreference] = None

    @classmethod
    def from_preference(
        cls,
        preference: NotificationPreference,
        save_preference: SavePreference,
    ) -> "OnboardingFlow":
        """Start an edit flow pre-filled from a stored preference."""
        return cls(
            preference.user_id,
            save_preference,
            channel_type=preference.channel_type,
            destination=preference.destination,
            categories=preference.categories,
        )

    def _require(self, step: OnboardingStep, action: str) -> None:
        if self.step is not step:
            raise OnboardingStateError(
                f"Cannot {action} while onboarding is {self.step.value}"
            )

    # ========================================
    # Step 1: destination
    # ========================================

    def select_channel_type(self, kind: ChannelKind) -> None:
        """Pick email or WhatsApp. Switching kind clears the destination."""
        self._require(OnboardingStep.COLLECTING_DESTINATION, "select a channel type")

        channel = NotificationChannel(kind)
        if channel is not self.channel_type:
            self.channel_type = channel
            self.destination = ""
        self.error = None

    def submit_destination(self, destination: str, kind: Optional[ChannelKind] = None) -> bool:
        """
        Validate the destination and move to the category step.

        Returns:
            True if the flow advanced, False if ``error`` was set
        """
        self._require(OnboardingStep.COLLECTING_DESTINATION, "submit a destination")

        if kind is not None:
            self.select_channel_type(kind)
        self.destination = destination

        message = destination_error(destination, self.channel_type)
        if message:
            self.error = message
            return False

        self.destination = normalize_destination(destination, self.channel_type)
        self.error = None
        self.step = OnboardingStep.COLLECTING_CATEGORIES
        return True

    # ========================================
    # Step 2: categories
    # ========================================

    def back(self) -> None:
        """Return to the destination step, keeping kind and destination."""
        self._require(OnboardingStep.COLLECTING_CATEGORIES, "go back")
        self.error = None
        self.step = OnboardingStep.COLLECTING_DESTINATION

    def toggle_category(self, tag: str) -> bool:
        """
        Select or deselect one category.

        Returns:
            True if ``tag`` is selected afterwards
        """
        self._require(OnboardingStep.COLLECTING_CATEGORIES, "toggle a category")

        try:
            value = ContentCategory(tag).value
        except ValueError:
            self.error = f"Unknown category: {tag}"
            return False

        self.error = None
        if value in self.categories:
            self.categories.remove(value)
            return False
        self.categories.append(value)
        return True

    async def submit_categories(self, categories: Optional[Iterable[str]] = None) -> bool:
        """
        Commit the wizard.

        Uses ``categories`` when given, otherwise what toggle_category()
        selected. On success save_preference() is called exactly once.
        Persistence errors propagate and leave the flow on this step.

        Returns:
            True if committed, False if ``error`` was set
        """
        self._require(OnboardingStep.COLLECTING_CATEGORIES, "submit categories")

        try:
            selected = clean_categories(self.categories if categories is None else categories)
        except ValueError as e:
            self.error = str(e)
            return False

        self.categories = selected
        if not selected:
            self.error = NO_CATEGORY_MESSAGE
            return False

        self.preference = await self.save_preference(
            self.user_id,
            self.channel_type,
            self.destination,
            list(selected),
        )
        self.error = None
        self.step = OnboardingStep.COMMITTED
        return True

    def restart(self) -> None:
        """Re-open a committed wizard at step 1. Nothing is persisted."""
        self._require(OnboardingStep.COMMITTED, "restart")
        self.error = None
        self.step = OnboardingStep.COLLECTING_DESTINATION


# ========================================
# Persistence
# ========================================

async def save_notification_preference(
    db: AsyncSession,
    user_id: str,
    channel_type: ChannelKind,
    destination: str,
    categories: List[str],
) -> NotificationPreference:
    """
    Insert or replace the user's notification preference in one statement.

    An existing row gets channel_type, destination and categories replaced
    and updated_at refreshed; enabled is left as it was. A new row is
    inserted with enabled = true.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: unchanged, the caller decides
    """
    channel = NotificationChannel(channel_type)

    await insert_or_update(
        db,
        NotificationPreference,
        values={
            "user_id": user_id,
            "channel_type": channel,
            "destination": destination,
            "categories": list(categories),
            "enabled": True,
        },
        conflict_columns=["user_id"],
        update_values={
            "channel_type": channel,
            "destination": destination,
            "categories": list(categories),
            "updated_at": utcnow(),
        },
    )

    preference = await get_notification_preference(db, user_id)
    await db.commit()

    logger.info(
        f"Saved notification preference for user {user_id} "
        f"(channel={channel.value}, categories={len(categories)})"
    )
    return preference


async def get_notification_preference(
    db: AsyncSession,
    user_id: str,
) -> Optional[NotificationPreference]:
    """Return the user's notification preference, or None before onboarding."""
    result = await db.execute(
        select(NotificationPreference)
        .where(NotificationPreference.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()
