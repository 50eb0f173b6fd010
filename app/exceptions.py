# Services raise these; routes map status_code onto the JSON error response.


class ServiceError(ValueError):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Validation failed"


class DuplicateKeyError(ServiceError):
    status_code = 400
    default_message = "Username or email already exists"


class UploadError(ServiceError):
    status_code = 500
    default_message = "Error uploading image"


class UnsupportedFormatError(UploadError):
    pass


class UnauthenticatedError(ServiceError):
    status_code = 401
    default_message = "User not authenticated"


class InvalidTokenError(ServiceError):
    status_code = 401
    default_message = "Invalid Login"


class UserNotFoundError(ServiceError):
    status_code = 401
    default_message = "User Not Found"


class InvalidCredentialsError(ServiceError):
    status_code = 403
    default_message = "Invalid User"


class AccessDeniedError(ServiceError):
    status_code = 403
    default_message = "Access Denied"


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Unauthorized"


class NotFoundError(ServiceError):
    status_code = 404

    def __init__(self, resource="Record", message=None):
        super().__init__(message or f"{resource} not found")
        self.resource = resource


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Record was modified concurrently, retry the request"
