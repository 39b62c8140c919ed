import enum
from typing import Callable, Optional, Protocol


class Route(str, enum.Enum):
    BILLS = "/bills"
    NEW_BILL = "/bills/new"


# Navigation capability injected into the bill components
Navigate = Callable[[Route], None]


class ImagePreviewer(Protocol):
    def show_image_preview(self, url: str) -> None: ...


class NavigationRecorder:
    """Navigate implementation that remembers the last requested route."""

    def __init__(self):
        self.route: Optional[Route] = None

    def __call__(self, route: Route) -> None:
        self.route = route
