"""Activity notification hook.

Called after a successful prospect mutation so a scoring subsystem can award
activity credit. The default implementation only logs and awards nothing.
"""

from __future__ import annotations

import logging

from levelcre.schemas.prospect import ProspectRead

logger = logging.getLogger(__name__)


class ActivityNotifier:
    """Receives activity events. Subclass to award credit."""

    def prospect_updated(self, actor_id: str, prospect: ProspectRead) -> int:
        """Record that `actor_id` updated `prospect`. Returns activity credit gained."""
        logger.info(
            "Prospect %s updated by %s (owner=%s, status=%s)",
            prospect.id,
            actor_id,
            prospect.owner_id,
            prospect.status.value,
        )
        return 0


def notify_prospect_updated(
    notifier: ActivityNotifier | None, actor_id: str, prospect: ProspectRead
) -> int:
    """Invoke the notifier; a failing notifier never changes the mutation outcome."""
    if notifier is None:
        return 0
    try:
        gained = notifier.prospect_updated(actor_id, prospect)
    except Exception:
        logger.warning(
            "Activity notifier failed for prospect %s (actor=%s)",
            prospect.id,
            actor_id,
            exc_info=True,
        )
        return 0
    return gained if isinstance(gained, int) else 0
