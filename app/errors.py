class DocFlowError(Exception):
    """Base class for errors reported to API callers as {"error": message}."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(DocFlowError):
    status_code = 400


class AuthError(DocFlowError):
    status_code = 401


class NotFoundError(DocFlowError):
    status_code = 404


class ConflictError(DocFlowError):
    status_code = 409


class InvalidTransitionError(ConflictError):
    def __init__(self, current, requested):
        super().__init__(f"Cannot move document from {current} to {requested}")
        self.current = current
        self.requested = requested


class PersistenceError(DocFlowError):
    status_code = 500
