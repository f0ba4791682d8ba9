"""Service for poll operations.

Polls live in the ``polls`` array of the event root item, so every change
rewrites the whole array.
"""

from typing import List

from aws_lambda_powertools.logging import Logger

from ..middleware.exceptions import PollNotFoundError
from ..models.api import CreatePollRequest, VoteRequest
from ..models.domain import Event, Poll, PollOption
from ..repositories.event import EventRepository, generate_id
from ..utils.timestamps import utc_now_iso


class PollService:
    def __init__(self, event_repository: EventRepository, logger: Logger) -> None:
        self.event_repository = event_repository
        self.logger = logger

    def _save_polls(self, event_id: str, polls: List[Poll], **extra_fields) -> None:
        self.event_repository.update_event_fields(
            event_id,
            {"polls": [poll.to_payload() for poll in polls], **extra_fields},
        )

    @staticmethod
    def _get_poll(event: Event, poll_id: str) -> Poll:
        poll = event.find_poll(poll_id)
        if poll is None:
            raise PollNotFoundError(event.id, poll_id)
        return poll

    def create_poll(self, event_id: str, request: CreatePollRequest) -> Poll:
        """Append a new poll to the event and enable voting on it.

        Raises:
            EventNotFoundError: If the event does not exist
        """
        event = self.event_repository.get_event(event_id)

        poll = Poll(
            id=generate_id(),
            question=request.question,
            type=request.type,
            options=[
                PollOption(
                    id=option.id or generate_id(),
                    label=option.label,
                    votes=list(dict.fromkeys(option.votes)),
                )
                for option in request.options
            ],
            is_active=request.is_active,
            closes_at=request.closes_at,
        )

        self._save_polls(event_id, [*event.polls, poll], hasVotingEnabled=True)
        self.logger.info("Poll created", extra={"event_id": event_id, "poll_id": poll.id})
        return poll

    def vote(self, event_id: str, poll_id: str, request: VoteRequest) -> Poll:
        """Record the user's vote, replacing any earlier vote on the same poll.

        Raises:
            EventNotFoundError: If the event does not exist
            PollNotFoundError: If the poll does not exist
            PollClosedError: If the poll is closed
            PollOptionNotFoundError: If the option is not part of the poll
        """
        event = self.event_repository.get_event(event_id)
        poll = self._get_poll(event, poll_id)
        poll.record_vote(request.option_id, request.user_id)

        self._save_polls(event_id, event.polls)
        self.logger.info(
            "Vote recorded",
            extra={
                "event_id": event_id,
                "poll_id": poll_id,
                "option_id": request.option_id,
                "user_id": request.user_id,
            },
        )
        return poll

    def close_poll(self, event_id: str, poll_id: str) -> Poll:
        """Close a poll, stamping ``closesAt`` with the current time.

        Raises:
            EventNotFoundError: If the event does not exist
            PollNotFoundError: If the poll does not exist
            PollClosedError: If the poll is already closed
        """
        event = self.event_repository.get_event(event_id)
        poll = self._get_poll(event, poll_id)
        poll.close(utc_now_iso())

        self._save_polls(event_id, event.polls)
        self.logger.info("Poll closed", extra={"event_id": event_id, "poll_id": poll_id})
        return poll
