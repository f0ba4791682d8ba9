"""Unit tests for the S3, Scheduler, SES, Secrets Manager and Slack clients."""

import json
import unittest
from unittest.mock import MagicMock, patch

import requests
from botocore.exceptions import ClientError

from src.clients.s3 import S3Client
from src.clients.scheduler import SchedulerClient
from src.clients.secrets import SecretsManagerClient
from src.clients.ses import EmailClient
from src.clients.slack import SLACK_POST_MESSAGE_URL, SlackClient
from src.config.app import AppConfig
from src.middleware.exceptions import (
    EmailDeliveryError,
    ObjectStorageError,
    SchedulerError,
    SecretsError,
)


def client_error(code: str = "AccessDenied") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "Operation")


def make_config(**overrides) -> AppConfig:
    fields = {"app_env": "dev", "version": "1.0.0", "commit_hash": "abcdef1234"}
    fields.update(overrides)
    return AppConfig(**fields)


class BotoClientTestCase(unittest.TestCase):
    """Patches boto3.client for the duration of each test."""

    def setUp(self):
        """Set up test fixtures."""
        self.client_patch = patch("boto3.client")
        self.mock_boto3_client = self.client_patch.start()
        self.mock_boto = MagicMock()
        self.mock_boto3_client.return_value = self.mock_boto

    def tearDown(self):
        """Tear down test fixtures."""
        self.client_patch.stop()


class TestS3Client(BotoClientTestCase):
    def setUp(self):
        super().setUp()
        self.client = S3Client(
            make_config(media_bucket_name="media", presigned_url_expiry=600)
        )

    def test_generate_upload_url(self):
        self.mock_boto.generate_presigned_url.return_value = "https://signed"

        url = self.client.generate_upload_url("events/e/media/m/a.png", "image/png")

        self.assertEqual("https://signed", url)
        self.mock_boto.generate_presigned_url.assert_called_once_with(
            "put_object",
            Params={
                "Bucket": "media",
                "Key": "events/e/media/m/a.png",
                "ContentType": "image/png",
            },
            ExpiresIn=600,
        )

    def test_generate_upload_url_failure(self):
        self.mock_boto.generate_presigned_url.side_effect = client_error()

        with self.assertRaises(ObjectStorageError):
            self.client.generate_upload_url("k", "image/png")

    def test_public_url(self):
        self.assertEqual(
            "https://media.s3.eu-central-1.amazonaws.com/events/e/a.png",
            self.client.public_url("events/e/a.png"),
        )

    def test_delete_object_in_other_bucket(self):
        self.client.delete_object("k", bucket="old-bucket")

        self.mock_boto.delete_object.assert_called_once_with(Bucket="old-bucket", Key="k")

    def test_delete_object_failure(self):
        self.mock_boto.delete_object.side_effect = client_error()

        with self.assertRaises(ObjectStorageError):
            self.client.delete_object("k")


class TestSchedulerClient(BotoClientTestCase):
    def setUp(self):
        super().setUp()
        self.client = SchedulerClient(
            make_config(
                scheduler_role_arn="arn:aws:iam::123456789012:role/scheduler",
                worker_function_name="worker",
            )
        )
        self.mock_boto.create_schedule.return_value = {"ScheduleArn": "arn:schedule"}

    def test_worker_arn(self):
        self.assertEqual(
            "arn:aws:lambda:eu-central-1:123456789012:function:worker",
            self.client.worker_arn("123456789012"),
        )

    def test_create_one_shot_schedule(self):
        arn = self.client.create_one_shot_schedule(
            name="msg-1",
            run_at="2025-05-30T10:00:00+02:00",
            target_arn="arn:worker",
            payload={"eventId": "e", "messageId": "1"},
        )

        self.assertEqual("arn:schedule", arn)
        params = self.mock_boto.create_schedule.call_args.kwargs
        self.assertEqual("at(2025-05-30T08:00:00)", params["ScheduleExpression"])
        self.assertEqual("UTC", params["ScheduleExpressionTimezone"])
        self.assertEqual({"Mode": "OFF"}, params["FlexibleTimeWindow"])
        self.assertEqual("DELETE", params["ActionAfterCompletion"])
        self.assertEqual("arn:worker", params["Target"]["Arn"])
        self.assertEqual(
            "arn:aws:iam::123456789012:role/scheduler", params["Target"]["RoleArn"]
        )
        self.assertEqual(
            {"eventId": "e", "messageId": "1"}, json.loads(params["Target"]["Input"])
        )
        self.assertNotIn("GroupName", params)

    def test_schedule_group(self):
        self.client.config = make_config(scheduler_group_name="planner")

        self.client.create_one_shot_schedule("msg-1", "2025-05-30T10:00:00Z", "arn", {})
        self.client.delete_schedule("msg-1")

        self.assertEqual(
            "planner", self.mock_boto.create_schedule.call_args.kwargs["GroupName"]
        )
        self.mock_boto.delete_schedule.assert_called_once_with(
            Name="msg-1", GroupName="planner"
        )

    def test_invalid_time(self):
        with self.assertRaises(SchedulerError):
            self.client.create_one_shot_schedule("msg-1", "tomorrow", "arn", {})

        self.mock_boto.create_schedule.assert_not_called()

    def test_create_failure(self):
        self.mock_boto.create_schedule.side_effect = client_error("ValidationException")

        with self.assertRaises(SchedulerError):
            self.client.create_one_shot_schedule("msg-1", "2025-05-30T10:00:00Z", "arn", {})

    def test_delete_failure(self):
        self.mock_boto.delete_schedule.side_effect = client_error("ResourceNotFoundException")

        with self.assertRaises(SchedulerError):
            self.client.delete_schedule("msg-1")


class TestEmailClient(BotoClientTestCase):
    def test_send_email(self):
        client = EmailClient(make_config(ses_from_email="noreply@example.com"))

        client.send_email("alice@example.com", "Subject", "Line 1\nLine 2")

        kwargs = self.mock_boto.send_email.call_args.kwargs
        self.assertEqual("noreply@example.com", kwargs["Source"])
        self.assertEqual({"ToAddresses": ["alice@example.com"]}, kwargs["Destination"])
        body = kwargs["Message"]["Body"]
        self.assertEqual("Line 1\nLine 2", body["Text"]["Data"])
        self.assertEqual("Line 1<br>Line 2", body["Html"]["Data"])
        self.assertEqual("Subject", kwargs["Message"]["Subject"]["Data"])

    def test_send_email_failure(self):
        self.mock_boto.send_email.side_effect = client_error("MessageRejected")
        client = EmailClient(make_config())

        with self.assertRaises(EmailDeliveryError):
            client.send_email("alice@example.com", "S", "B")


class TestSecretsManagerClient(BotoClientTestCase):
    def setUp(self):
        super().setUp()
        self.client = SecretsManagerClient(make_config())

    def test_json_secret(self):
        self.mock_boto.get_secret_value.return_value = {
            "SecretString": json.dumps({"token": "xoxb", "channelId": "C1"})
        }

        self.assertEqual(
            {"token": "xoxb", "channelId": "C1"}, self.client.get_json_secret("arn")
        )
        self.mock_boto.get_secret_value.assert_called_once_with(SecretId="arn")

    def test_secret_errors(self):
        cases = [
            client_error("ResourceNotFoundException"),
            {"SecretString": "not json"},
            {"SecretString": "[1]"},
            {},
        ]
        for case in cases:
            with self.subTest(case=case):
                if isinstance(case, Exception):
                    self.mock_boto.get_secret_value.side_effect = case
                else:
                    self.mock_boto.get_secret_value.side_effect = None
                    self.mock_boto.get_secret_value.return_value = case
                with self.assertRaises(SecretsError):
                    self.client.get_json_secret("arn")


class TestSlackClient(unittest.TestCase):
    """Test cases for SlackClient."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_secrets = MagicMock(spec=SecretsManagerClient)
        self.mock_secrets.get_json_secret.return_value = {
            "token": "xoxb-1",
            "channelId": "C-DEFAULT",
        }
        self.client = SlackClient(
            make_config(slack_secret_arn="arn:slack"), self.mock_secrets
        )

        self.post_patch = patch("src.clients.slack.requests.post")
        self.mock_post = self.post_patch.start()
        self.mock_post.return_value.json.return_value = {"ok": True}

    def tearDown(self):
        """Tear down test fixtures."""
        self.post_patch.stop()

    def test_posts_to_default_channel(self):
        self.assertTrue(self.client.send_notification("hello"))

        self.mock_post.assert_called_once_with(
            SLACK_POST_MESSAGE_URL,
            headers={
                "Content-Type": "application/json",
                "Authorization": "Bearer xoxb-1",
            },
            json={"channel": "C-DEFAULT", "text": "hello"},
            timeout=10,
        )

    def test_explicit_channel_wins(self):
        self.client.send_notification("hello", "C-OTHER")

        self.assertEqual("C-OTHER", self.mock_post.call_args.kwargs["json"]["channel"])

    def test_credentials_are_fetched_once(self):
        self.client.send_notification("one")
        self.client.send_notification("two")

        self.mock_secrets.get_json_secret.assert_called_once_with("arn:slack")

    def test_slack_api_error(self):
        self.mock_post.return_value.json.return_value = {
            "ok": False,
            "error": "channel_not_found",
        }

        self.assertFalse(self.client.send_notification("hello"))

    def test_network_error(self):
        self.mock_post.side_effect = requests.ConnectionError("down")

        self.assertFalse(self.client.send_notification("hello"))

    def test_missing_secret(self):
        self.mock_secrets.get_json_secret.side_effect = SecretsError()

        self.assertFalse(self.client.send_notification("hello"))
        self.mock_post.assert_not_called()

    def test_secret_not_configured(self):
        client = SlackClient(make_config(), self.mock_secrets)

        self.assertFalse(client.send_notification("hello"))
        self.mock_secrets.get_json_secret.assert_not_called()


if __name__ == "__main__":
    unittest.main()
