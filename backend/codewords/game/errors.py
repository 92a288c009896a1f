class GameError(Exception):
    """Base class for rejected game actions.

    ``kind`` is the machine-readable tag sent to clients alongside the
    message; ``http_status`` is used by the REST blueprint.
    """

    kind = 'error'
    http_status = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'message': self.message, 'kind': self.kind}


class NotFound(GameError):
    kind = 'not_found'
    http_status = 404


class InvalidState(GameError):
    kind = 'invalid_state'
    http_status = 400


class Forbidden(GameError):
    kind = 'forbidden'
    http_status = 403


class InvalidInput(GameError):
    kind = 'invalid_input'
    http_status = 400


class StoreUnavailable(GameError):
    """The backing store could not be reached; safe to retry."""

    kind = 'store_unavailable'
    http_status = 503
