from fastapi import HTTPException, status


class ApiError(HTTPException):
    """Base for errors rendered as ``{"msg": ..., "error": ...}``."""

    def __init__(self, status_code: int, msg: str, error: str | None = None):
        super().__init__(status_code=status_code, detail=msg)
        self.error = error

    def to_content(self) -> dict[str, str]:
        content = {"msg": self.detail}
        if self.error is not None:
            content["error"] = self.error
        return content


class ValidationFailedError(ApiError):
    def __init__(self, msg: str, error: str | None = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, msg, error)


class ConflictError(ApiError):
    def __init__(self, msg: str = "User already exists"):
        super().__init__(status.HTTP_400_BAD_REQUEST, msg)


class InvalidCredentialsError(ApiError):
    def __init__(self):
        super().__init__(status.HTTP_400_BAD_REQUEST, "Invalid credentials or role")


class ServerError(ApiError):
    def __init__(self, error: str):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error", error)
