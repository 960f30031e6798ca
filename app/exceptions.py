from fastapi import status


class StringAnalyzerError(Exception):
    """Base error rendered to the client as {"error": ..., "message": ...}"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class BadRequest(StringAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class UnprocessableEntity(StringAnalyzerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error = "Unprocessable Entity"


class Conflict(StringAnalyzerError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class NotFound(StringAnalyzerError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"
