import unittest
from unittest.mock import MagicMock

from fakes import InMemoryDynamoDBClient, make_event
from pydantic import ValidationError

from src.middleware.exceptions import (
    PollClosedError,
    PollNotFoundError,
    PollOptionNotFoundError,
)
from src.models.api import CreatePollRequest, VoteRequest
from src.repositories.dynamodb_event import DynamoDBEventRepository
from src.services.polls import PollService


def vote(option_id: str, user_id: str) -> VoteRequest:
    return VoteRequest.model_validate({"optionId": option_id, "userId": user_id})


class TestPollService(unittest.TestCase):
    def setUp(self):
        self.client = InMemoryDynamoDBClient()
        self.repository = DynamoDBEventRepository(self.client)
        self.repository.create_event(make_event())
        self.service = PollService(self.repository, MagicMock())
        self.poll = self.service.create_poll(
            "evt-1",
            CreatePollRequest.model_validate(
                {
                    "question": "Which day?",
                    "type": "date",
                    "options": [
                        {"id": "A", "label": "Friday"},
                        {"id": "B", "label": "Saturday"},
                    ],
                }
            ),
        )

    def stored_votes(self):
        poll = self.repository.get_event("evt-1").find_poll(self.poll.id)
        return {option.id: option.votes for option in poll.options}

    def test_create_poll_enables_voting(self):
        event = self.repository.get_event("evt-1")

        self.assertTrue(event.has_voting_enabled)
        self.assertEqual([self.poll.id], [p.id for p in event.polls])
        self.assertTrue(event.polls[0].is_active)

    def test_create_poll_generates_missing_option_ids(self):
        poll = self.service.create_poll(
            "evt-1",
            CreatePollRequest.model_validate(
                {"question": "Where?", "type": "location", "options": [{"label": "Lake"}]}
            ),
        )

        self.assertTrue(poll.options[0].id)
        self.assertEqual(2, len(self.repository.get_event("evt-1").polls))

    def test_create_poll_collapses_repeated_votes_within_an_option(self):
        poll = self.service.create_poll(
            "evt-1",
            CreatePollRequest.model_validate(
                {
                    "question": "Where?",
                    "type": "location",
                    "options": [{"id": "L", "label": "Lake", "votes": ["u1", "u1"]}],
                }
            ),
        )

        self.assertEqual(["u1"], poll.options[0].votes)

    def test_revote_moves_user_between_options(self):
        self.service.vote("evt-1", self.poll.id, vote("A", "alice"))

        self.service.vote("evt-1", self.poll.id, vote("B", "alice"))

        self.assertEqual({"A": [], "B": ["alice"]}, self.stored_votes())

    def test_closed_poll_rejects_vote_and_keeps_state(self):
        self.service.vote("evt-1", self.poll.id, vote("A", "alice"))
        closed = self.service.close_poll("evt-1", self.poll.id)

        with self.assertRaises(PollClosedError):
            self.service.vote("evt-1", self.poll.id, vote("B", "bob"))

        self.assertFalse(closed.is_active)
        self.assertIsNotNone(closed.closes_at)
        self.assertEqual({"A": ["alice"], "B": []}, self.stored_votes())

    def test_vote_unknown_option(self):
        with self.assertRaises(PollOptionNotFoundError):
            self.service.vote("evt-1", self.poll.id, vote("Z", "alice"))

    def test_vote_unknown_poll(self):
        with self.assertRaises(PollNotFoundError):
            self.service.vote("evt-1", "missing", vote("A", "alice"))

    def test_close_poll_twice(self):
        self.service.close_poll("evt-1", self.poll.id)

        with self.assertRaises(PollClosedError):
            self.service.close_poll("evt-1", self.poll.id)


class TestCreatePollRequest(unittest.TestCase):
    """Option ids are unique and a user holds at most one vote per poll."""

    def build(self, options):
        return CreatePollRequest.model_validate(
            {"question": "Which day?", "type": "date", "options": options}
        )

    def test_duplicate_option_ids_are_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.build([{"id": "a", "label": "Fri"}, {"id": "a", "label": "Sat"}])

        self.assertIn("duplicate option id 'a'", str(ctx.exception))

    def test_user_voting_for_several_options_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.build(
                [
                    {"id": "a", "label": "Fri", "votes": ["u1"]},
                    {"id": "b", "label": "Sat", "votes": ["u1", "u2"]},
                ]
            )

        self.assertIn("user 'u1' has votes on several options", str(ctx.exception))

    def test_options_without_ids_are_allowed(self):
        request = self.build([{"label": "Fri"}, {"label": "Sat"}])

        self.assertEqual([None, None], [option.id for option in request.options])

    def test_empty_vote_ids_are_rejected(self):
        for body in ({"optionId": "", "userId": "u1"}, {"optionId": "a", "userId": ""}):
            with self.subTest(body=body):
                with self.assertRaises(ValidationError):
                    VoteRequest.model_validate(body)


if __name__ == "__main__":
    unittest.main()
