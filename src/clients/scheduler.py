"""Client wrapper for EventBridge Scheduler one-shot schedules."""

import json
from typing import Any, Dict

import boto3
from botocore.exceptions import ClientError

from ..config.app import AppConfig
from ..middleware.exceptions import SchedulerError
from ..middleware.logging import logger
from ..utils.timestamps import to_schedule_expression


class SchedulerClient:
    """Creates and removes the schedules that trigger message delivery."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.scheduler = boto3.client("scheduler", region_name=config.aws_region)

    @staticmethod
    def schedule_name(message_id: str) -> str:
        return f"msg-{message_id}"

    def worker_arn(self, account_id: str) -> str:
        """ARN of the worker Lambda in the given account."""
        return (
            f"arn:aws:lambda:{self.config.aws_region}:{account_id}:"
            f"function:{self.config.worker_function_name}"
        )

    def create_one_shot_schedule(
        self, name: str, run_at: str, target_arn: str, payload: Dict[str, Any]
    ) -> str:
        """Create a schedule firing once at ``run_at`` and deleting itself afterwards.

        Args:
            name: Schedule name
            run_at: ISO 8601 timestamp, converted to UTC
            target_arn: Lambda function to invoke
            payload: JSON input passed to the target

        Returns:
            The schedule ARN

        Raises:
            SchedulerError: If the timestamp is invalid or the call fails
        """
        try:
            expression = to_schedule_expression(run_at)
        except ValueError as e:
            raise SchedulerError(
                f"Invalid schedule time: {run_at}",
                code="invalid_schedule_time",
                details={"e": str(e)},
            )

        params: Dict[str, Any] = {
            "Name": name,
            "ScheduleExpression": expression,
            "ScheduleExpressionTimezone": "UTC",
            "FlexibleTimeWindow": {"Mode": "OFF"},
            "ActionAfterCompletion": "DELETE",
            "Target": {
                "Arn": target_arn,
                "RoleArn": self.config.scheduler_role_arn,
                "Input": json.dumps(payload),
            },
        }
        if self.config.scheduler_group_name:
            params["GroupName"] = self.config.scheduler_group_name

        try:
            response = self.scheduler.create_schedule(**params)
        except ClientError as e:
            raise SchedulerError(
                "Failed to create schedule",
                code="create_schedule_failed",
                details={"name": name, "e": str(e)},
            )

        logger.info(
            "Schedule created",
            extra={"schedule_name": name, "expression": expression},
        )
        return response["ScheduleArn"]

    def delete_schedule(self, name: str) -> None:
        """Delete a schedule by name.

        Raises:
            SchedulerError: If the call fails, including when the schedule is gone
        """
        params = {"Name": name}
        if self.config.scheduler_group_name:
            params["GroupName"] = self.config.scheduler_group_name

        try:
            self.scheduler.delete_schedule(**params)
        except ClientError as e:
            raise SchedulerError(
                "Failed to delete schedule",
                code="delete_schedule_failed",
                details={"name": name, "e": str(e)},
            )
