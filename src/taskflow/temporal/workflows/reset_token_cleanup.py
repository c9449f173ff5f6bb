"""
Reset Token Cleanup Workflow.

Started by a Temporal schedule (daily at midnight UTC by default) to purge
expired password reset tokens. Safe to run any number of times.
"""

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from src.taskflow.temporal.activities import cleanup_expired_reset_tokens


@workflow.defn
class ResetTokenCleanupWorkflow:
    """Delete expired reset tokens and report how many were removed."""

    @workflow.run
    async def run(self) -> int:
        workflow.logger.info("Starting reset token cleanup")

        count = await workflow.execute_activity(
            cleanup_expired_reset_tokens,
            start_to_close_timeout=timedelta(minutes=5),
            retry_policy=RetryPolicy(
                maximum_attempts=3,
                initial_interval=timedelta(seconds=2),
            ),
        )

        workflow.logger.info(f"Reset token cleanup complete: {count} deleted")
        return count
