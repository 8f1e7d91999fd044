"""Port interface for the transaction a distribution run writes in."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    @abstractmethod
    async def acquire_run_lock(self) -> None:
        """Block other processes' distribution runs until commit or rollback."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
