from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, TYPE_CHECKING

from .errors import LifecycleError
from .navigation import NavigationBridge
from .view_session import ViewSession

if TYPE_CHECKING:
    from .host import DebugHost

logger = logging.getLogger(__name__)


class TreeDebugger:
    """Enables and disables tree views for sources on a single host

    This is the only thing that creates or destroys ViewSessions.
    There is at most one active session per source.
    """

    def __init__(self, host: DebugHost):
        self.host: DebugHost = host
        self.navigation: NavigationBridge = NavigationBridge(host)
        # Keyed by id() because source handles don't have to be hashable.
        # The session holds the source, so the id can't be reused while stored
        self._sessions: dict[int, ViewSession] = {}

    def session_for(self, source: Any) -> Optional[ViewSession]:
        """Get the active session for the source, if there is one"""
        return self._sessions.get(id(source))

    def active_sessions(self) -> list[ViewSession]:
        return list(self._sessions.values())

    def _forget(self, session: ViewSession):
        # Called on every teardown, including a destroyed source
        if self._sessions.get(id(session.source)) is session:
            del self._sessions[id(session.source)]

    def enable_debugging(
        self, source: Any, options: Optional[Mapping[str, Any]] = None
    ) -> ViewSession:
        if self.session_for(source) is not None:
            raise LifecycleError(f"Tree debugging is already enabled for {source!r}")

        session = ViewSession(self.host, source, options, on_teardown=self._forget)
        session.enable()
        self._sessions[id(source)] = session
        logger.info("Enabled tree debugging for %r", source)
        return session

    def disable_debugging(self, session: ViewSession):
        session.disable()
        logger.info("Disabled tree debugging for %r", session.source)

    def toggle_debugging(
        self, source: Any, options: Optional[Mapping[str, Any]] = None
    ) -> Optional[ViewSession]:
        """Enable tree debugging for the source, or disable it if it's already on

        Returns:
            The new session, or None if debugging was turned off
        """
        session = self.session_for(source)
        if session is not None:
            self.disable_debugging(session)
            return None
        return self.enable_debugging(source, options)

    def navigate(self, session: ViewSession, index: int):
        """Jump from the display line at `index` to its span in the source"""
        self.navigation.navigate(session, index)

    def reveal(self, session: ViewSession, offset: int) -> Optional[int]:
        """Find the display line of the deepest node containing a source offset"""
        return session.line_for_offset(offset)
