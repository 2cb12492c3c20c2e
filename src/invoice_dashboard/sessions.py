"""
Per-session dashboard controllers.

Reflex state is serialized between events, so the live controller of each
browser session (with its tasks and service handles) is kept here, keyed
by the session's client token.
"""

from typing import Callable

from invoice_dashboard.controller import DashboardController
from invoice_dashboard.lib import logs

LOG = logs.logger(__file__)


class ControllerRegistry:
    """Maps client tokens to their open DashboardController."""

    def __init__(self, factory: Callable[[], DashboardController]) -> None:
        self._factory = factory
        self._controllers: dict[str, DashboardController] = {}

    def __len__(self) -> int:
        return len(self._controllers)

    def get(self, token: str) -> DashboardController | None:
        """Return the session's open controller, or None after teardown."""
        controller = self._controllers.get(token)
        if controller is None or controller.closed:
            return None
        return controller

    def get_or_create(self, token: str) -> DashboardController:
        """Return the session's open controller, creating a fresh one if needed."""
        controller = self.get(token)
        if controller is None:
            controller = self._controllers[token] = self._factory()
            LOG.info("Created dashboard controller for session %s", token)
        return controller

    def close(self, token: str) -> bool:
        """
        Close and forget the session's controller.

        Returns:
            False when the session had no controller.
        """
        controller = self._controllers.pop(token, None)
        if controller is None:
            return False
        controller.close()
        return True
