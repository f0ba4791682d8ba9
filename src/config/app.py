import os
from pathlib import Path
from typing import Optional

from aws_lambda_powertools.logging import Logger
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = Logger()


class AppConfig(BaseModel):
    """Application configuration."""

    app_env: str = Field(description="Application environment (local, dev or prod)")
    version: str = Field(description="Application version")
    commit_hash: str = Field(description="Commit hash")
    aws_region: str = Field(default="eu-central-1", description="AWS region")
    dynamodb_table_name: str = Field(
        default="event-planner-dev-table", description="Name of the DynamoDB table"
    )
    gsi1_index_name: str = Field(
        default="GSI1", description="Name of the status/date secondary index"
    )
    media_bucket_name: str = Field(
        default="event-planner-dev-media",
        description="Name of the S3 bucket for event media",
    )
    presigned_url_expiry: int = Field(
        default=3600, ge=1, description="Lifetime of presigned upload URLs in seconds"
    )
    scheduler_group_name: Optional[str] = Field(
        default=None, description="EventBridge Scheduler group for message schedules"
    )
    scheduler_role_arn: Optional[str] = Field(
        default=None, description="Role assumed by the scheduler to invoke the worker"
    )
    worker_function_name: str = Field(
        default="event-planner-dev-process-message",
        description="Name of the Lambda function delivering scheduled messages",
    )
    slack_secret_arn: Optional[str] = Field(
        default=None, description="Secrets Manager ARN holding the Slack bot token"
    )
    ses_from_email: str = Field(
        default="notifications@example.com",
        description="Verified SES sender address",
    )
    cors_allow_origin: str = Field(
        default="*", description="Value of the Access-Control-Allow-Origin header"
    )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables.

        In 'local' mode (default), it first loads variables from a .env file.
        In 'dev' and 'prod' modes, it reads directly from environment variables.
        """

        app_env = os.getenv("APP_ENV", "local").lower()
        logger.debug("App environment", extra={"app_env": app_env})
        if app_env == "local":
            dotenv_path = Path(".env")
            load_dotenv(dotenv_path=dotenv_path, override=True)
            logger.debug("Loaded .env file", extra={"dotenv_path": str(dotenv_path)})
        elif app_env not in ["dev", "prod"]:
            raise ValueError(f"Invalid app environment: {app_env}")

        return cls(
            app_env=app_env,
            version=os.getenv("VERSION", "unknown"),
            commit_hash=os.getenv("COMMIT_HASH", "unknown"),
            aws_region=os.getenv("AWS_REGION", "eu-central-1"),
            dynamodb_table_name=os.getenv(
                "DYNAMODB_TABLE_NAME", "event-planner-dev-table"
            ),
            gsi1_index_name=os.getenv("GSI1_INDEX_NAME", "GSI1"),
            media_bucket_name=os.getenv("MEDIA_BUCKET_NAME", "event-planner-dev-media"),
            presigned_url_expiry=int(os.getenv("PRESIGNED_URL_EXPIRY", "3600")),
            scheduler_group_name=os.getenv("SCHEDULER_GROUP_NAME"),
            scheduler_role_arn=os.getenv("SCHEDULER_ROLE_ARN"),
            worker_function_name=os.getenv(
                "WORKER_FUNCTION_NAME", "event-planner-dev-process-message"
            ),
            slack_secret_arn=os.getenv("SLACK_SECRET_ARN"),
            ses_from_email=os.getenv("SES_FROM_EMAIL", "notifications@example.com"),
            cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", "*"),
        )
