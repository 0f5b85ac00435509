class TrackerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPayload(TrackerError):
    status_code = 400


class InvalidDate(TrackerError):
    status_code = 400


class NotFound(TrackerError):
    """Missing resource, or one owned by another profile."""

    status_code = 404


class ActiveProfileDeletion(TrackerError):
    status_code = 400

    def __init__(self, message: str = "Cannot delete the active profile. Switch profiles first."):
        super().__init__(message)
