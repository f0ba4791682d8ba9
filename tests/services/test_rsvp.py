import unittest
from unittest.mock import MagicMock

from fakes import InMemoryDynamoDBClient, make_event

from src.middleware.exceptions import EventNotFoundError
from src.models.api import RSVPRequest
from src.models.domain import RSVPStatus
from src.repositories.dynamodb_event import DynamoDBEventRepository
from src.services.rsvp import RSVPService


def rsvp(user_id: str, status: str = "going") -> RSVPRequest:
    return RSVPRequest.model_validate(
        {
            "status": status,
            "userId": user_id,
            "userName": user_id.title(),
            "userEmail": f"{user_id}@example.com",
        }
    )


class TestRSVPService(unittest.TestCase):
    def setUp(self):
        self.repository = DynamoDBEventRepository(InMemoryDynamoDBClient())
        self.repository.create_event(make_event(capacity=2, waitlist_enabled=True))
        self.service = RSVPService(self.repository, MagicMock())

    def test_capacity_moves_third_attendee_to_waitlist(self):
        # Arrange
        self.service.respond("evt-1", rsvp("alice"))
        self.service.respond("evt-1", rsvp("bob"))

        # Act
        response = self.service.respond("evt-1", rsvp("carol"))

        # Assert
        self.assertEqual(RSVPStatus.WAITLIST, response.status)
        self.assertTrue(response.was_waitlisted)
        statuses = {a.id: a.status for a in self.repository.list_attendees("evt-1")}
        self.assertEqual(
            {
                "alice": RSVPStatus.GOING,
                "bob": RSVPStatus.GOING,
                "carol": RSVPStatus.WAITLIST,
            },
            statuses,
        )

    def test_repeated_going_keeps_the_seat(self):
        self.service.respond("evt-1", rsvp("alice"))
        self.service.respond("evt-1", rsvp("bob"))

        response = self.service.respond("evt-1", rsvp("bob"))

        self.assertEqual(RSVPStatus.GOING, response.status)
        self.assertFalse(response.was_waitlisted)

    def test_seat_frees_up_after_not_going(self):
        self.service.respond("evt-1", rsvp("alice"))
        self.service.respond("evt-1", rsvp("bob"))
        self.service.respond("evt-1", rsvp("alice", "not-going"))

        response = self.service.respond("evt-1", rsvp("carol"))

        self.assertEqual(RSVPStatus.GOING, response.status)

    def test_maybe_is_accepted_at_capacity(self):
        self.service.respond("evt-1", rsvp("alice"))
        self.service.respond("evt-1", rsvp("bob"))

        response = self.service.respond("evt-1", rsvp("carol", "maybe"))

        self.assertEqual(RSVPStatus.MAYBE, response.status)
        self.assertFalse(response.was_waitlisted)

    def test_response_payload(self):
        payload = self.service.respond("evt-1", rsvp("alice")).to_payload()

        self.assertEqual("evt-1", payload["eventId"])
        self.assertEqual("alice", payload["userId"])
        self.assertEqual("going", payload["status"])
        self.assertIn("respondedAt", payload)
        self.assertFalse(payload["wasWaitlisted"])

    def test_unknown_event(self):
        with self.assertRaises(EventNotFoundError):
            self.service.respond("nope", rsvp("alice"))


if __name__ == "__main__":
    unittest.main()
