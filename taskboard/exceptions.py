"""Error kinds raised by the task service and their client-facing messages."""

TASK_NOT_FOUND = "task not found"
ROUTE_NOT_FOUND = "not found"
INVALID_JSON_BODY = "invalid JSON body"
BODY_NOT_OBJECT = "request body must be a JSON object"
INTERNAL_ERROR = "internal server error"


class TaskError(Exception):
    """Base class for task service errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    """Malformed or out-of-range input; the message names the field and rule."""

    status_code = 400


class NotFoundError(TaskError):
    status_code = 404

    def __init__(self, message: str = TASK_NOT_FOUND):
        super().__init__(message)


class InternalError(TaskError):
    status_code = 500

    def __init__(self, message: str = INTERNAL_ERROR):
        super().__init__(message)
