class CollaboratorError(Exception):
    """A call to one of the backend endpoints failed.

    ``status_code`` is set when the endpoint answered with an error status,
    and is None for transport failures.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UploadFailed(CollaboratorError):
    pass


class DeleteFailed(CollaboratorError):
    pass


class ExportFailed(CollaboratorError):
    pass


class ChatFailed(CollaboratorError):
    pass
