"""Ports onto the rendering collaborator's overlay layer and native selection."""

from collections.abc import Callable, Mapping
from typing import Protocol

from readmark.domain.common.value_objects import PositionRange

OVERLAY_KIND_HIGHLIGHT = "highlight"


class OverlayProtocol(Protocol):
    """Visual annotations drawn over rendered content.

    Both methods raise OverlayRegistrationError when the range is not part
    of the currently rendered section.
    """

    def add_annotation(
        self,
        kind: str,
        position_range: PositionRange,
        style: Mapping[str, str],
        on_click: Callable[[], None] | None = None,
        css_class: str = "",
    ) -> None: ...

    def remove_annotation(self, position_range: PositionRange, kind: str) -> None: ...


class SelectionProtocol(Protocol):
    """The reader's native text selection."""

    def clear(self) -> None: ...
