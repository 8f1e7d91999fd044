"""Port interface for the worker roster."""

from abc import ABC, abstractmethod

from app.domain.entities.worker import Worker


class WorkerRepository(ABC):
    @abstractmethod
    async def save(self, worker: Worker) -> Worker:
        ...

    @abstractmethod
    async def get_by_id(self, worker_id: int) -> Worker | None:
        ...

    @abstractmethod
    async def get_roster(self) -> list[Worker]:
        """All workers in roster order (creation order)."""
        ...

    @abstractmethod
    async def get_by_email_or_mobile(self, email: str, mobile: str) -> Worker | None:
        ...
