from enum import Enum


class TreeDebugError(Exception):
    """Base class for all tree debugging errors"""


class LifecycleError(TreeDebugError):
    """A view session transition was attempted from the wrong state"""


class NavigationFailure(Enum):
    NO_SOURCE = "no source bound"
    SOURCE_UNAVAILABLE = "source no longer available"
    NOT_NAVIGABLE = "not a navigable line"


class NavigationError(TreeDebugError):
    """A jump from the tree view back to the source could not be made

    The `reason` names which precondition was violated
    """

    def __init__(self, reason: NavigationFailure, detail: str = ""):
        self.reason: NavigationFailure = reason
        self.detail: str = detail
        msg = reason.value
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class SourceUnavailableError(NavigationError):
    """The source side was destroyed after the view was rendered"""

    def __init__(self, detail: str = ""):
        super().__init__(NavigationFailure.SOURCE_UNAVAILABLE, detail)
