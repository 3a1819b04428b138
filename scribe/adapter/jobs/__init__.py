"""Background job adapter."""

from .queue import InProcessJobQueue, JobScope, SavepointJobScope

__all__ = ["InProcessJobQueue", "JobScope", "SavepointJobScope"]
