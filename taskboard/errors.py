"""Error taxonomy shared by the lifecycle rules, the store and the HTTP layer."""


class TaskError(Exception):
    status_code = 500
    public_message = "Internal server error"


class TaskValidationError(TaskError):
    """Input rejected before it reaches the store (e.g. blank title)."""

    status_code = 400

    def __init__(self, message: str = "Title is required"):
        super().__init__(message)
        self.public_message = message


class TaskNotFound(TaskError):
    status_code = 404
    public_message = "Task not found"

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StoreError(TaskError):
    """Any persistence failure, connectivity loss included.

    The message shown to callers is generic; the underlying cause is kept on
    ``__cause__`` and only ever written to the server log.
    """

    status_code = 500
    public_message = "Database error occurred"
