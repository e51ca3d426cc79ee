"""Error taxonomy for the API.

Every domain error carries the HTTP status it maps to and renders as
``{"message": ..., "error": <taxonomy name>}``.
"""


class SplitterError(Exception):
    status_code = 500
    code = "InternalError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"message": self.message, "error": self.code}


class Unauthenticated(SplitterError):
    status_code = 401
    code = "Unauthenticated"

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class InvalidInput(SplitterError):
    status_code = 400
    code = "InvalidInput"

    def __init__(self, message: str = "Please provide all required fields"):
        super().__init__(message)


class NoValidSplits(SplitterError):
    status_code = 400
    code = "NoValidSplits"

    def __init__(self, message: str = "Please provide at least one valid user to split with"):
        super().__init__(message)


class ShareMismatch(SplitterError):
    status_code = 400
    code = "ShareMismatch"

    def __init__(self, message: str = "Total shares must equal the expense amount"):
        super().__init__(message)


class NotFound(SplitterError):
    status_code = 404
    code = "NotFound"
