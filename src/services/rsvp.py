"""Service for RSVP operations."""

from aws_lambda_powertools.logging import Logger

from ..models.api import RSVPRequest, RSVPResponse
from ..models.domain import Attendee, RSVPStatus
from ..repositories.event import EventRepository
from ..utils.timestamps import utc_now_iso


class RSVPService:
    """Records attendee responses, moving 'going' to the waitlist at capacity."""

    def __init__(self, event_repository: EventRepository, logger: Logger) -> None:
        self.event_repository = event_repository
        self.logger = logger

    def respond(self, event_id: str, request: RSVPRequest) -> RSVPResponse:
        """Store the user's RSVP for an event.

        Attendees going are counted fresh on every call, leaving out the
        responding user so that repeating a 'going' RSVP keeps the seat. Two
        concurrent RSVPs at the capacity boundary can both be admitted.

        Raises:
            EventNotFoundError: If the event does not exist
        """
        event = self.event_repository.get_event(event_id)
        attendees = self.event_repository.list_attendees(event_id)
        going_count = sum(
            1
            for attendee in attendees
            if attendee.status == RSVPStatus.GOING and attendee.id != request.user_id
        )

        status = event.resolve_rsvp_status(request.status, going_count)
        was_waitlisted = (
            request.status == RSVPStatus.GOING and status == RSVPStatus.WAITLIST
        )

        attendee = Attendee.for_user(request.to_user(), status, utc_now_iso())
        self.event_repository.save_attendee(event_id, attendee)

        self.logger.info(
            "RSVP recorded",
            extra={
                "event_id": event_id,
                "user_id": request.user_id,
                "status": status.value,
                "going_count": going_count,
                "was_waitlisted": was_waitlisted,
            },
        )

        return RSVPResponse(
            event_id=event_id,
            user_id=attendee.id,
            status=status,
            responded_at=attendee.responded_at,
            was_waitlisted=was_waitlisted,
        )
