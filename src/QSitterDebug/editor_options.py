from Qt.QtCore import QObject, Signal
from typing import Optional, Any

from .view_session import DEFAULT_OPTIONS


class EditorOptions(QObject):
    """Tree debugging options shared by every session a debugger opens

    Only the keys in DEFAULT_OPTIONS are accepted. Listen to `optionsUpdated`
    to find out which keys changed.
    """

    optionsUpdated = Signal(list)  # list of str

    def __init__(self, opts: Optional[dict[str, Any]] = None):
        super().__init__()
        self._options: dict[str, Any] = dict(DEFAULT_OPTIONS)
        if opts:
            self._check_keys(opts)
            self._options.update(opts)

    @staticmethod
    def _check_keys(keys):
        unknown = set(keys) - set(DEFAULT_OPTIONS)
        if unknown:
            raise KeyError(f"Unrecognized tree debug options: {', '.join(sorted(unknown))}")

    def __getitem__(self, key: str):
        return self._options[key]

    def __setitem__(self, key: str, value):
        self._check_keys([key])
        self._options[key] = value
        self.optionsUpdated.emit([key])

    def __contains__(self, key: str) -> bool:
        return key in self._options

    def update(self, opts: dict[str, Any]):
        self._check_keys(opts)
        self._options.update(opts)
        self.optionsUpdated.emit(list(opts.keys()))

    def get(self, key, default=None) -> Any:
        return self._options.get(key, default)

    def keys(self):
        return self._options.keys()
