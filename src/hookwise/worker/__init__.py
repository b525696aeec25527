"""Background hand-off of verified events."""

from hookwise.worker.queue import EventWorker, WorkerStats

__all__ = ["EventWorker", "WorkerStats"]
