"""Background job providers."""

from dishka import Scope, provide

from scribe.adapter.jobs import InProcessJobQueue, JobScope
from scribe.domain.service import JobQueue
from scribe.util.di.base import ProviderBase


class JobQueueProvider(ProviderBase):
    """Job queue provider - concrete, no mocks needed.

    The job scope comes from the persistence component so jobs share its
    transaction handling.
    """

    @provide(scope=Scope.REQUEST)
    def get_job_queue(self, job_scope: JobScope) -> JobQueue:
        """Provide in-process job queue."""
        return InProcessJobQueue(job_scope)
