"""Exceptions raised while fetching and extracting menu pages."""


class MenuError(Exception):
    """Base class for all errors that abort a run."""


class MenuStructureError(MenuError):
    """The page no longer has the structure the extractor relies on."""


class TransportError(MenuError):
    """Retrieving a source page failed."""


class NotFoundError(TransportError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Resource not found: {url}")
        self.url = url
