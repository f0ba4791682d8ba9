"""Client for posting messages to Slack through the Web API."""

from typing import Dict, Optional

import requests

from ..config.app import AppConfig
from ..middleware.exceptions import SecretsError
from ..middleware.logging import logger
from .secrets import SecretsManagerClient

SLACK_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"
REQUEST_TIMEOUT_SECONDS = 10


class SlackClient:
    """Posts notifications with a bot token kept in Secrets Manager.

    The secret holds ``{"token": ..., "channelId": ...}``. It is fetched on
    first use and kept on the instance for the lifetime of the execution
    environment. Delivery is best effort: every failure is logged and
    swallowed.
    """

    def __init__(self, config: AppConfig, secrets_client: SecretsManagerClient) -> None:
        self.config = config
        self.secrets_client = secrets_client
        self._credentials: Optional[Dict[str, str]] = None

    def _get_credentials(self) -> Optional[Dict[str, str]]:
        if self._credentials is not None:
            return self._credentials

        if not self.config.slack_secret_arn:
            logger.warning("SLACK_SECRET_ARN is not set")
            return None

        try:
            self._credentials = self.secrets_client.get_json_secret(
                self.config.slack_secret_arn
            )
        except SecretsError as e:
            logger.error(
                "Error fetching Slack credentials",
                extra={"code": e.code, "details": e.details},
            )
            return None
        return self._credentials

    def send_notification(self, text: str, channel: Optional[str] = None) -> bool:
        """Post ``text`` to ``channel``, or to the default channel of the secret.

        Returns:
            True when Slack accepted the message
        """
        credentials = self._get_credentials()
        if not credentials:
            logger.warning("Skipping Slack notification: credentials not found")
            return False

        target_channel = channel or credentials.get("channelId")
        if not target_channel:
            logger.warning("Skipping Slack notification: no channel configured")
            return False

        try:
            response = requests.post(
                SLACK_POST_MESSAGE_URL,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {credentials.get('token', '')}",
                },
                json={"channel": target_channel, "text": text},
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(
                "Error sending Slack notification",
                extra={"channel": target_channel, "error": str(e)},
            )
            return False

        if not data.get("ok"):
            logger.error(
                "Slack API error",
                extra={"channel": target_channel, "error": data.get("error")},
            )
            return False

        logger.info("Slack notification sent", extra={"channel": target_channel})
        return True
