"""Unit tests for domain model behaviour."""

import unittest

from fakes import make_event, make_message

from src.middleware.exceptions import PollClosedError, PollOptionNotFoundError
from src.models.api import RSVPRequest
from src.models.domain import (
    Attendee,
    MediaItem,
    Poll,
    RSVPStatus,
    UploadStatus,
    UserRole,
)


def make_poll(**overrides) -> Poll:
    fields = {
        "id": "poll-1",
        "question": "Where should we go?",
        "type": "location",
        "options": [
            {"id": "opt-a", "label": "Alps", "votes": []},
            {"id": "opt-b", "label": "Beach", "votes": []},
        ],
    }
    fields.update(overrides)
    return Poll.model_validate(fields)


class TestPoll(unittest.TestCase):
    def test_vote_is_recorded(self):
        poll = make_poll()

        option = poll.record_vote("opt-a", "alice")

        self.assertEqual("opt-a", option.id)
        self.assertEqual(["alice"], poll.find_option("opt-a").votes)

    def test_revote_moves_the_vote(self):
        """A user's vote appears in exactly one option after voting again."""
        poll = make_poll()
        poll.record_vote("opt-a", "alice")
        poll.record_vote("opt-a", "bob")

        poll.record_vote("opt-b", "alice")

        self.assertEqual(["bob"], poll.find_option("opt-a").votes)
        self.assertEqual(["alice"], poll.find_option("opt-b").votes)

    def test_repeated_vote_for_same_option_counts_once(self):
        poll = make_poll()

        poll.record_vote("opt-a", "alice")
        poll.record_vote("opt-a", "alice")

        self.assertEqual(["alice"], poll.find_option("opt-a").votes)

    def test_vote_on_closed_poll_is_rejected(self):
        poll = make_poll(is_active=False)

        with self.assertRaises(PollClosedError) as ctx:
            poll.record_vote("opt-a", "alice")

        self.assertEqual(400, ctx.exception.status_code)
        self.assertEqual([], poll.find_option("opt-a").votes)

    def test_vote_for_unknown_option(self):
        poll = make_poll()

        with self.assertRaises(PollOptionNotFoundError):
            poll.record_vote("opt-z", "alice")

    def test_close(self):
        poll = make_poll()

        poll.close("2025-05-01T00:00:00.000Z")

        self.assertFalse(poll.is_active)
        self.assertEqual("2025-05-01T00:00:00.000Z", poll.closes_at)

    def test_close_twice(self):
        poll = make_poll()
        poll.close("2025-05-01T00:00:00.000Z")

        with self.assertRaises(PollClosedError):
            poll.close("2025-05-02T00:00:00.000Z")

    def test_wire_format_is_camel_case(self):
        payload = make_poll().to_payload()

        self.assertIn("isActive", payload)
        self.assertNotIn("is_active", payload)
        self.assertNotIn("closesAt", payload)


class TestEventRSVPStatus(unittest.TestCase):
    def test_going_below_capacity(self):
        event = make_event(capacity=2)

        self.assertEqual(
            RSVPStatus.GOING, event.resolve_rsvp_status(RSVPStatus.GOING, 1)
        )

    def test_going_at_capacity_is_waitlisted(self):
        event = make_event(capacity=2)

        self.assertEqual(
            RSVPStatus.WAITLIST, event.resolve_rsvp_status(RSVPStatus.GOING, 2)
        )

    def test_going_at_capacity_without_waitlist(self):
        event = make_event(capacity=2, waitlist_enabled=False)

        self.assertEqual(
            RSVPStatus.GOING, event.resolve_rsvp_status(RSVPStatus.GOING, 5)
        )

    def test_other_statuses_are_never_moved(self):
        event = make_event(capacity=1)

        for status in (RSVPStatus.MAYBE, RSVPStatus.NOT_GOING, RSVPStatus.WAITLIST):
            self.assertEqual(status, event.resolve_rsvp_status(status, 3))


class TestEventRepresentation(unittest.TestCase):
    def test_response_hides_media_storage_location(self):
        event = make_event(
            media=[
                {
                    "id": "m1",
                    "url": "https://bucket/key",
                    "type": "image",
                    "uploadedBy": "alice",
                    "uploadedAt": "2025-01-01T00:00:00.000Z",
                    "s3Key": "events/evt-1/media/m1/a.jpg",
                    "s3Bucket": "bucket",
                }
            ]
        )

        response = event.to_response()

        media = response["media"][0]
        self.assertEqual("m1", media["id"])
        self.assertNotIn("s3Key", media)
        self.assertNotIn("s3Bucket", media)

    def test_response_without_children(self):
        response = make_event().to_response(with_children=False)

        self.assertEqual("Team Offsite", response["title"])
        self.assertEqual("evt-1", response["id"])
        for field in ("attendees", "media", "scheduledMessages"):
            self.assertNotIn(field, response)

    def test_defaults(self):
        event = make_event()

        self.assertFalse(event.has_voting_enabled)
        self.assertEqual(0, event.budget.total)
        self.assertEqual([], event.budget.items)
        self.assertEqual([], event.polls)


class TestMediaItem(unittest.TestCase):
    def test_upload_status_transitions(self):
        self.assertTrue(UploadStatus.PENDING.can_transition_to(UploadStatus.COMPLETED))
        self.assertFalse(UploadStatus.COMPLETED.can_transition_to(UploadStatus.PENDING))

    def test_response_hides_storage_location(self):
        media = MediaItem(
            id="m1",
            url="https://bucket/key",
            type="video",
            uploaded_by="alice",
            uploaded_at="2025-01-01T00:00:00.000Z",
            s3_key="k",
            s3_bucket="b",
        )

        response = media.to_response()

        self.assertEqual("pending", response["uploadStatus"])
        self.assertNotIn("s3Key", response)


class TestScheduledMessage(unittest.TestCase):
    def test_schedule_name_from_arn(self):
        self.assertEqual("msg-msg-1", make_message().schedule_name)

    def test_schedule_name_without_arn(self):
        self.assertIsNone(make_message(scheduler_schedule_arn=None).schedule_name)


class TestAttendee(unittest.TestCase):
    def test_for_user(self):
        request = RSVPRequest.model_validate(
            {
                "status": "maybe",
                "userId": "u1",
                "userName": "Alice",
                "userEmail": "alice@example.com",
                "userAvatar": "https://avatars.example/u1.png",
            }
        )
        user = request.to_user()

        attendee = Attendee.for_user(user, RSVPStatus.MAYBE, "2025-01-01T00:00:00.000Z")

        self.assertEqual(UserRole.MEMBER, user.role)
        self.assertEqual("u1", attendee.id)
        self.assertEqual("alice@example.com", attendee.email)
        self.assertEqual("https://avatars.example/u1.png", attendee.avatar)
        self.assertEqual(RSVPStatus.MAYBE, attendee.status)


if __name__ == "__main__":
    unittest.main()
