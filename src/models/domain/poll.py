"""Poll domain model, embedded in the event root item."""

from typing import List, Optional

from pydantic import Field

from ...middleware.exceptions import PollClosedError, PollOptionNotFoundError
from .base import CamelModel
from .enums import PollType


class PollOption(CamelModel):
    """One answer of a poll; ``votes`` holds the ids of users who picked it."""

    id: str = Field(..., description="Option identifier, unique within the poll")
    label: str = Field(..., description="Option text")
    votes: List[str] = Field(default_factory=list, description="Voting user ids")


class Poll(CamelModel):
    """A poll attached to an event.

    Attributes:
        id: Poll identifier, unique within the event
        question: Question asked
        type: What the poll decides (date, location or free-form)
        options: Possible answers
        is_active: False once the poll has been closed
        closes_at: Planned or actual closing time
    """

    id: str
    question: str
    type: PollType
    options: List[PollOption] = Field(default_factory=list)
    is_active: bool = True
    closes_at: Optional[str] = None

    def find_option(self, option_id: str) -> Optional[PollOption]:
        return next((o for o in self.options if o.id == option_id), None)

    def record_vote(self, option_id: str, user_id: str) -> PollOption:
        """Cast ``user_id``'s single vote for ``option_id``.

        Any earlier vote of the same user on this poll is removed first, so a
        user appears in at most one option's votes.

        Raises:
            PollClosedError: If the poll is no longer active
            PollOptionNotFoundError: If the option does not belong to the poll
        """
        if not self.is_active:
            raise PollClosedError(details={"poll_id": self.id})

        option = self.find_option(option_id)
        if option is None:
            raise PollOptionNotFoundError(
                details={"poll_id": self.id, "option_id": option_id}
            )

        for candidate in self.options:
            candidate.votes = [v for v in candidate.votes if v != user_id]
        option.votes.append(user_id)
        return option

    def close(self, closed_at: str) -> None:
        """Close the poll. Closing is one-way.

        Raises:
            PollClosedError: If the poll is already closed
        """
        if not self.is_active:
            raise PollClosedError(
                message="Poll is already closed", details={"poll_id": self.id}
            )
        self.is_active = False
        self.closes_at = closed_at
