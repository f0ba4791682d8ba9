"""Services for scheduled messages: scheduling, cancellation and delivery."""

from typing import List

from aws_lambda_powertools.logging import Logger

from ..clients.scheduler import SchedulerClient
from ..clients.ses import EmailClient
from ..clients.slack import SlackClient
from ..middleware.exceptions import MessageNotFoundError, SchedulerError
from ..models.api import CreateMessageRequest
from ..models.domain import (
    DeliveryStatus,
    MessageChannel,
    RecipientType,
    RSVPStatus,
    ScheduledMessage,
)
from ..repositories.event import EventRepository, generate_id
from ..utils.timestamps import utc_now_iso

EMAIL_SUBJECT_TEMPLATE = "Event Planner Notification: {type}"
SLACK_TEXT_TEMPLATE = "\N{BELL} Scheduled Message: *{content}*"

# Attendee statuses receiving email for each recipient selection
RECIPIENT_STATUSES = {
    RecipientType.ALL: set(RSVPStatus),
    RecipientType.GOING: {RSVPStatus.GOING},
    RecipientType.MAYBE: {RSVPStatus.MAYBE},
}


class MessageService:
    """Schedules messages for later delivery and cancels them."""

    def __init__(
        self,
        event_repository: EventRepository,
        scheduler_client: SchedulerClient,
        logger: Logger,
    ) -> None:
        self.event_repository = event_repository
        self.scheduler_client = scheduler_client
        self.logger = logger

    def schedule_message(
        self, event_id: str, request: CreateMessageRequest, account_id: str
    ) -> ScheduledMessage:
        """Create the one-shot schedule, then store the PENDING message.

        Args:
            event_id: Owning event
            request: Validated message request
            account_id: AWS account of the worker function

        Raises:
            EventNotFoundError: If the event does not exist
            SchedulerError: If the schedule cannot be created
        """
        self.event_repository.get_event(event_id)

        message_id = generate_id()
        schedule_arn = self.scheduler_client.create_one_shot_schedule(
            name=self.scheduler_client.schedule_name(message_id),
            run_at=request.scheduled_at,
            target_arn=self.scheduler_client.worker_arn(account_id),
            payload={"eventId": event_id, "messageId": message_id},
        )

        now = utc_now_iso()
        message = ScheduledMessage(
            id=message_id,
            event_id=event_id,
            status=DeliveryStatus.PENDING,
            scheduler_schedule_arn=schedule_arn,
            created_at=now,
            updated_at=now,
            **request.model_dump(exclude_unset=True),
        )
        self.event_repository.save_message(message)

        self.logger.info(
            "Message scheduled",
            extra={
                "event_id": event_id,
                "message_id": message_id,
                "schedule_arn": schedule_arn,
            },
        )
        return message

    def delete_message(self, event_id: str, message_id: str) -> None:
        """Delete a message, removing its schedule first while it is still pending.

        A schedule that cannot be deleted (usually because it already fired)
        is logged and ignored.

        Raises:
            MessageNotFoundError: If the message does not exist
        """
        message = self.event_repository.get_message(event_id, message_id)

        schedule_name = message.schedule_name
        if message.status == DeliveryStatus.PENDING and schedule_name:
            try:
                self.scheduler_client.delete_schedule(schedule_name)
                self.logger.info("Schedule deleted", extra={"schedule_name": schedule_name})
            except SchedulerError as e:
                self.logger.warning(
                    "Failed to delete schedule (might already be gone)",
                    extra={"schedule_name": schedule_name, "details": e.details},
                )

        self.event_repository.delete_message(event_id, message_id)
        self.logger.info(
            "Message deleted", extra={"event_id": event_id, "message_id": message_id}
        )


class MessageDeliveryService:
    """Delivers a due message over Slack and email, then marks it SENT."""

    def __init__(
        self,
        event_repository: EventRepository,
        slack_client: SlackClient,
        email_client: EmailClient,
        logger: Logger,
    ) -> None:
        self.event_repository = event_repository
        self.slack_client = slack_client
        self.email_client = email_client
        self.logger = logger

    def resolve_recipients(self, message: ScheduledMessage) -> List[str]:
        """Email addresses selected by the message's recipient type, without duplicates."""
        if message.recipient_type == RecipientType.CUSTOM:
            candidates = list(message.custom_recipients or [])
        else:
            statuses = RECIPIENT_STATUSES[message.recipient_type]
            candidates = [
                attendee.email
                for attendee in self.event_repository.list_attendees(message.event_id)
                if attendee.status in statuses
            ]
        return list(dict.fromkeys(candidates))

    def deliver(self, event_id: str, message_id: str) -> bool:
        """Deliver a scheduled message once.

        Slack is used when no channels are set or when slack is among them;
        Slack failures are only logged. Email goes to each resolved recipient
        and its failures propagate, leaving the message PENDING.

        Returns:
            True if the message was delivered by this call, False if it was
            missing or already sent
        """
        try:
            message = self.event_repository.get_message(event_id, message_id)
        except MessageNotFoundError:
            self.logger.warning(
                "Message not found", extra={"event_id": event_id, "message_id": message_id}
            )
            return False

        if message.status == DeliveryStatus.SENT:
            self.logger.info(
                "Message already sent",
                extra={"event_id": event_id, "message_id": message_id},
            )
            return False

        channels = message.channels
        if not channels or MessageChannel.SLACK in channels:
            self.slack_client.send_notification(
                SLACK_TEXT_TEMPLATE.format(content=message.content),
                message.slack_channel,
            )

        if MessageChannel.EMAIL in channels:
            recipients = self.resolve_recipients(message)
            subject = message.subject or EMAIL_SUBJECT_TEMPLATE.format(
                type=message.type.value
            )
            for recipient in recipients:
                self.email_client.send_email(recipient, subject, message.content)
            self.logger.info(
                "Emails sent",
                extra={"message_id": message_id, "recipient_count": len(recipients)},
            )

        now = utc_now_iso()
        self.event_repository.update_message_fields(
            event_id,
            message_id,
            {"status": DeliveryStatus.SENT.value, "sentAt": now, "updatedAt": now},
        )
        self.logger.info(
            "Message processed successfully",
            extra={"event_id": event_id, "message_id": message_id},
        )
        return True
