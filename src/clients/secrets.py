"""Client wrapper for AWS Secrets Manager."""

import json
from typing import Any, Dict

import boto3
from botocore.exceptions import ClientError

from ..config.app import AppConfig
from ..middleware.exceptions import SecretsError


class SecretsManagerClient:
    """Reads JSON secrets from Secrets Manager."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.client = boto3.client("secretsmanager", region_name=config.aws_region)

    def get_json_secret(self, secret_id: str) -> Dict[str, Any]:
        """Fetch a secret whose value is a JSON object.

        Args:
            secret_id: The ARN or name of the secret

        Raises:
            SecretsError: If the secret cannot be read or is not a JSON object
        """
        try:
            response = self.client.get_secret_value(SecretId=secret_id)
        except ClientError as e:
            raise SecretsError(
                "Failed to read secret",
                code="get_secret_failed",
                details={"secret_id": secret_id, "e": str(e)},
            )

        try:
            value = json.loads(response.get("SecretString") or "")
        except json.JSONDecodeError as e:
            raise SecretsError(
                "Secret is not valid JSON",
                code="secret_not_json",
                details={"secret_id": secret_id, "e": str(e)},
            )
        if not isinstance(value, dict):
            raise SecretsError(
                "Secret is not a JSON object",
                code="secret_not_object",
                details={"secret_id": secret_id},
            )
        return value
