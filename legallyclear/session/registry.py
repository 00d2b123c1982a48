import asyncio
import uuid
from collections import OrderedDict
from collections.abc import Callable

from legallyclear.logging.logger import Log
from legallyclear.session.controller import SessionController


class SessionRegistry:
    """In-memory map of session id -> SessionController.

    Least recently used sessions are dropped once max_sessions is exceeded.
    """

    def __init__(
        self,
        controller_factory: Callable[[str], SessionController],
        max_sessions: int = 1000,
    ) -> None:
        self._controller_factory = controller_factory
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, SessionController] = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    async def get_or_create(self, session_id: str | None) -> SessionController:
        """Return the controller for session_id, creating a new session if unknown."""
        async with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return self._sessions[session_id]

            new_id = uuid.uuid4().hex
            controller = self._controller_factory(new_id)
            self._sessions[new_id] = controller
            Log.info(f"Session {new_id} created")
            while len(self._sessions) > self._max_sessions:
                evicted_id, evicted = self._sessions.popitem(last=False)
                evicted.cancel_pending()
                Log.info(f"Session {evicted_id} evicted")
            return controller

    async def close(self) -> None:
        """Cancel in-flight analyses of every session and wait for them to stop."""
        controllers = list(self._sessions.values())
        self._sessions.clear()
        for controller in controllers:
            controller.cancel_pending()
        for controller in controllers:
            await controller.drain()
