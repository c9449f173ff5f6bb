"""
Temporal Worker - Separate process from API.

Run with:
    uv run python -m src.taskflow.temporal.worker                 # Worker and schedule
    uv run python -m src.taskflow.temporal.worker --no-schedule   # Worker only
"""

import argparse
import asyncio
from collections.abc import Sequence

import uvicorn
from fastapi import FastAPI
from temporalio.client import (
    Client,
    Schedule,
    ScheduleActionStartWorkflow,
    ScheduleAlreadyRunningError,
    ScheduleSpec,
)
from temporalio.worker import Worker

from src.taskflow.core.config import get_settings
from src.taskflow.core.db import dispose_engine
from src.taskflow.core.logging import get_logger, setup_logging
from src.taskflow.temporal.activities import cleanup_expired_reset_tokens
from src.taskflow.temporal.client import get_temporal_client
from src.taskflow.temporal.workflows import ResetTokenCleanupWorkflow

logger = get_logger(__name__)

WORKER_HEALTH_PORT = 8001
CLEANUP_SCHEDULE_ID = "reset-token-cleanup"


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Temporal worker")
    parser.add_argument(
        "--no-schedule",
        action="store_true",
        help="Do not register the reset token cleanup schedule",
    )
    return parser.parse_args()


async def create_worker(
    client: Client,
    task_queue: str,
    workflows: Sequence[type],
    activities: Sequence[object],
    *,
    max_concurrent_activities: int = 50,
    max_concurrent_workflow_tasks: int = 50,
) -> Worker:
    """Create a worker with tuned settings.

    Args:
        client: Temporal client
        task_queue: Task queue name
        workflows: List of workflow classes
        activities: List of activity functions
        max_concurrent_activities: Max concurrent activity executions
        max_concurrent_workflow_tasks: Max concurrent workflow task executions
    """
    return Worker(
        client,
        task_queue=task_queue,
        workflows=list(workflows),
        activities=list(activities),  # type: ignore[arg-type]
        max_concurrent_activities=max_concurrent_activities,
        max_concurrent_workflow_tasks=max_concurrent_workflow_tasks,
    )


async def ensure_cleanup_schedule(client: Client) -> bool:
    """Register the reset token cleanup schedule.

    Returns:
        True if the schedule was created, False if it already existed.
    """
    settings = get_settings()
    try:
        await client.create_schedule(
            CLEANUP_SCHEDULE_ID,
            Schedule(
                action=ScheduleActionStartWorkflow(
                    ResetTokenCleanupWorkflow.run,
                    id=CLEANUP_SCHEDULE_ID,
                    task_queue=settings.temporal_task_queue,
                ),
                spec=ScheduleSpec(cron_expressions=[settings.cleanup_schedule]),
            ),
        )
    except ScheduleAlreadyRunningError:
        logger.info("Cleanup schedule already registered", schedule_id=CLEANUP_SCHEDULE_ID)
        return False
    logger.info(
        "Cleanup schedule registered",
        schedule_id=CLEANUP_SCHEDULE_ID,
        cron=settings.cleanup_schedule,
    )
    return True


async def run_health_server(task_queue: str, port: int = WORKER_HEALTH_PORT) -> None:
    """Run a lightweight health server for K8s probes."""
    health_app = FastAPI(title="Temporal Worker Health")

    @health_app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": "temporal-worker",
            "task_queue": task_queue,
        }

    @health_app.get("/ready")
    async def ready() -> dict[str, str]:
        return {"status": "ready"}

    config = uvicorn.Config(health_app, host="0.0.0.0", port=port, log_level="warning")
    server = uvicorn.Server(config)
    logger.info(f"Starting health server on port {port}")
    await server.serve()


async def main() -> None:
    """Main entry point for the Temporal worker."""
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.debug)

    client = await get_temporal_client()
    if not args.no_schedule:
        await ensure_cleanup_schedule(client)

    worker = await create_worker(
        client,
        settings.temporal_task_queue,
        workflows=[ResetTokenCleanupWorkflow],
        activities=[cleanup_expired_reset_tokens],
    )
    logger.info(f"Polling task queue: {settings.temporal_task_queue}")

    try:
        health_task = asyncio.create_task(run_health_server(settings.temporal_task_queue))
        await worker.run()
        await health_task
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
