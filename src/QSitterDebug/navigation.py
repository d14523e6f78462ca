from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .errors import NavigationError, NavigationFailure, SourceUnavailableError

if TYPE_CHECKING:
    from .host import DebugHost
    from .tree_renderer import DisplayLine
    from .view_session import ViewSession

logger = logging.getLogger(__name__)


class NavigationBridge:
    """Jumps from a line of a rendered tree back to its span in the source"""

    def __init__(self, host: DebugHost):
        self.host: DebugHost = host

    def check_session(self, session: ViewSession):
        """Raise if the session can't be navigated from at all"""
        if session.source_destroyed or (
            session.source is not None and not self.host.is_source_valid(session.source)
        ):
            raise SourceUnavailableError(repr(session.source))
        if not session.is_active or session.source is None:
            raise NavigationError(
                NavigationFailure.NO_SOURCE,
                f"the tree view session is {session.state.value}",
            )

    def jump_to(self, session: ViewSession, line: DisplayLine):
        self.check_session(session)
        span = line.navigable_span
        if span is None:
            raise NavigationError(
                NavigationFailure.NOT_NAVIGABLE,
                f"{line.label!r} has no source span (navigation is disabled)",
            )

        highlight = session.options.highlight_on_navigate
        logger.debug("Jumping to %s %s (highlight=%s)", line.label, span, highlight)
        self.host.focus_and_select(session.source, span, highlight)

    def navigate(self, session: ViewSession, index: int):
        """Jump to the source of the display line at `index`"""
        self.check_session(session)
        if not 0 <= index < len(session.lines):
            raise NavigationError(
                NavigationFailure.NOT_NAVIGABLE,
                f"there is no display line {index}",
            )
        self.jump_to(session, session.lines[index])
