from __future__ import annotations


class CollectionLoadError(Exception):
    """Base class for failures that leave the session without records."""

    prefix = "Error loading collection"

    def user_message(self) -> str:
        return f"{self.prefix}: {self}"


class FetchError(CollectionLoadError):
    """The source resource could not be retrieved."""

    prefix = "Error loading file"


class ParseError(CollectionLoadError):
    """The retrieved text could not be parsed into records."""

    prefix = "Error parsing CSV"


class NoDataError(CollectionLoadError):
    """The text parsed but produced zero records."""

    def __init__(self, message: str = "No data found in the CSV file"):
        super().__init__(message)

    def user_message(self) -> str:
        return str(self)
