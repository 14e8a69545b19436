"""Guard failures and their HTTP status mapping."""

from enum import Enum


class DecodeCategory(str, Enum):
    """Why a JSON body failed to decode."""

    EOF = "eof"
    SYNTAX = "syntax"
    IO = "io"
    DATA = "data"

    @property
    def status_code(self) -> int:
        if self is DecodeCategory.IO:
            return 500
        if self is DecodeCategory.DATA:
            return 422
        return 400


class RequestForwarded(Exception):
    """The guard declined the request; another handler may take it."""

    def __init__(self, content_type: str | None):
        super().__init__(f"Not a JSON request (content type: {content_type!r})")
        self.content_type = content_type


class GuardFailure(Exception):
    """A request failed a guard and must end with ``status_code``."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class JsonDecodeFailure(GuardFailure):
    def __init__(self, category: DecodeCategory, message: str):
        super().__init__(category.status_code, message)
        self.category = category


class ResourceValidationFailure(GuardFailure):
    """One or more validation rules rejected a decoded resource."""

    PREFIX = "The following validation errors occurred: "

    def __init__(self, messages: list[str]):
        super().__init__(400, self.PREFIX + ";".join(messages))
        self.messages = messages
