# src/lined/core/__init__.py
"""Public facade for lined.core: re-export the editing model from CamelCase modules.

`Lined` itself is imported from `lined.core.Lined`; it depends on the ui
package, which in turn imports from here.
"""

from .Coordinates import Coordinates, Direction  # noqa: F401
from .Document import Document  # noqa: F401
from .EditEngine import EditEngine  # noqa: F401
from .Navigator import Navigator  # noqa: F401
from .SearchNavigator import SearchNavigator  # noqa: F401
from .Viewport import Viewport  # noqa: F401
from .errors import FileSaveError, LinedError, TerminalIOError  # noqa: F401


__all__ = [
    "Coordinates",
    "Direction",
    "Document",
    "EditEngine",
    "Navigator",
    "SearchNavigator",
    "Viewport",
    "LinedError",
    "TerminalIOError",
    "FileSaveError",
]
