"""Read access to user profiles and tasks."""

from abc import ABC, abstractmethod

from famdocs.engine.models import Profile, Task


class BaseProfileRepository(ABC):
    """Abstract base class for profile sources."""

    @abstractmethod
    async def get_profile(self, user_id: str | None = None) -> Profile:
        """Load a user's profile.

        Args:
            user_id: User identifier, or None for the default user.

        Returns:
            The stored profile, or an empty profile when none exists.
        """


class BaseTaskRepository(ABC):
    """Abstract base class for task sources."""

    @abstractmethod
    async def get_task(self, task_id: str, user_id: str | None = None) -> Task | None:
        """Load one task.

        Args:
            task_id: Task identifier.
            user_id: Owner of the task, or None for the default user.

        Returns:
            The task, or None when it does not exist.
        """
