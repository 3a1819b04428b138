"""In-process job queue."""

from contextlib import AbstractAsyncContextManager, nullcontext
from typing import Any, Awaitable, Callable

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.domain.service import JobQueue


class JobScope:
    """Boundary a single job runs in.

    The default scope adds nothing; persistence backends with transactions
    override it so a failed job leaves the caller's work intact.
    """

    def __call__(self) -> AbstractAsyncContextManager[Any]:
        return nullcontext()


class SavepointJobScope(JobScope):
    """Runs each job inside a savepoint of the request session.

    A job that fails rolls back to the savepoint, keeping the outer
    transaction committable.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def __call__(self) -> AbstractAsyncContextManager[Any]:
        return self.session.begin_nested()


class InProcessJobQueue(JobQueue):
    """Runs each job as soon as it is enqueued, inside the caller's scope.

    Jobs share the caller's request-scoped database session, so they run
    before the session is committed. A failing job is logged and dropped
    and its writes are undone by the job scope.
    """

    def __init__(self, job_scope: JobScope | None = None) -> None:
        self.job_scope = job_scope or JobScope()

    async def enqueue(self, name: str, job: Callable[[], Awaitable[Any]]) -> None:
        """Run the job, logging and swallowing its failure.

        Args:
            name: Job name for logging
            job: Zero-argument coroutine factory
        """
        with logfire.span("job", job_name=name):
            try:
                async with self.job_scope():
                    await job()
            except Exception as e:
                logfire.error(
                    "Job failed",
                    job_name=name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
