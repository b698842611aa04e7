"""This module contains custom exceptions."""


class InvalidVariableRegex(Exception):
    """Raised if the regular expression identifying variability variables can
    not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(
            f"Invalid variable reference regex '{pattern}': {reason}"
        )
        self.pattern = pattern


class InputDocumentError(Exception):
    """Base class for errors caused by malformed input documents."""


class MissingDocumentHeader(InputDocumentError):
    """Raised if a document does not start with a ``DocType``/``Version``
    header."""

    def __init__(self, file_path: str) -> None:
        super().__init__(
            f"No DocType/Version header found in {file_path}, got wrong yaml "
            "document."
        )


class WrongDocumentType(InputDocumentError):
    """Raised if the header names another document type than expected."""

    def __init__(self, expected_type: str, actual_type: str) -> None:
        super().__init__(
            f"Expected DocType: '{expected_type}' but got '{actual_type}'"
        )


class UnsupportedDocumentVersion(InputDocumentError):
    """Raised if the document version is older than the oldest supported
    one."""

    def __init__(self, min_version: int, actual_version: int) -> None:
        super().__init__(
            f"Expected minimal version: '{min_version}' but got version "
            f"'{actual_version}'"
        )


class MalformedEntryError(InputDocumentError):
    """Raised if an entry of an input document is missing a required key or
    holds an unusable value."""


class MalformedConditionError(InputDocumentError):
    """Raised if a presence condition or constraint can not be parsed."""

    def __init__(self, expression: str, reason: str) -> None:
        super().__init__(f"Could not parse condition '{expression}': {reason}")
        self.expression = expression
