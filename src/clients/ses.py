"""Client wrapper for sending transactional email through SES."""

import boto3
from botocore.exceptions import ClientError

from ..config.app import AppConfig
from ..middleware.exceptions import EmailDeliveryError
from ..middleware.logging import logger


class EmailClient:
    """Sends one plain-text plus HTML message per recipient."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.ses = boto3.client("ses", region_name=config.aws_region)

    def send_email(self, to: str, subject: str, body: str) -> None:
        """Send ``body`` to a single recipient.

        The HTML part is the text body with newlines turned into ``<br>``.

        Raises:
            EmailDeliveryError: If SES rejects the message
        """
        try:
            self.ses.send_email(
                Source=self.config.ses_from_email,
                Destination={"ToAddresses": [to]},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": {
                        "Text": {"Data": body, "Charset": "UTF-8"},
                        "Html": {"Data": body.replace("\n", "<br>"), "Charset": "UTF-8"},
                    },
                },
            )
        except ClientError as e:
            raise EmailDeliveryError(
                "Failed to send email",
                code="send_email_failed",
                details={"to": to, "e": str(e)},
            )
        logger.info("Email sent", extra={"to": to})
