"""Temporal Workflows - Re-exports for worker registration."""

from src.taskflow.temporal.workflows.reset_token_cleanup import ResetTokenCleanupWorkflow

__all__ = ["ResetTokenCleanupWorkflow"]
