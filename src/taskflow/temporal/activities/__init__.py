"""Temporal Activities - idempotent operations run by the worker."""

from src.taskflow.temporal.activities.cleanup import cleanup_expired_reset_tokens

__all__ = ["cleanup_expired_reset_tokens"]
