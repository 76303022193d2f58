# utils/exceptions.py


class AttendanceError(Exception):
    """Base class for every rejected attendance action."""

    code = "AttendanceError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(AttendanceError):
    code = "Unauthorized"
    status_code = 401

    def __init__(self, message: str = "Unauthorized", status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class OfficeNotConfigured(AttendanceError):
    code = "OfficeNotConfigured"
    status_code = 500

    def __init__(self, message: str = "Office location not configured."):
        super().__init__(message)


class LocationOutOfRange(AttendanceError):
    code = "LocationOutOfRange"
    status_code = 400

    def __init__(self, distance: int, max_distance: float):
        super().__init__(
            f"You are {distance}m away from office. Must be within {max_distance:g}m."
        )
        self.distance = distance
        self.max_distance = max_distance


class DuplicatePunchIn(AttendanceError):
    code = "DuplicatePunchIn"
    status_code = 409

    def __init__(self, message: str = "Already punched in for today."):
        super().__init__(message)


class NoPunchInRecord(AttendanceError):
    code = "NoPunchInRecord"
    status_code = 404

    def __init__(self, message: str = "No punch-in record found for today."):
        super().__init__(message)


class AlreadyPunchedOut(AttendanceError):
    code = "AlreadyPunchedOut"
    status_code = 409

    def __init__(self, message: str = "Already punched out today."):
        super().__init__(message)


class RecordNotFound(AttendanceError):
    code = "RecordNotFound"
    status_code = 404

    def __init__(self, message: str = "Record not found"):
        super().__init__(message)


class MalformedInput(AttendanceError):
    code = "MalformedInput"
    status_code = 422
