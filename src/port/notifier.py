"""Port definition for user-facing feedback (toasts, status lines)."""

from typing import Protocol


class Notifier(Protocol):
    def notify(self, kind: str, message: str) -> None:
        """Show message to the user. kind is 'success', 'error' or 'warning'."""
        ...
