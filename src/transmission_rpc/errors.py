class TransmissionError(Exception):
    pass


class TransmissionConnectionError(TransmissionError):
    """The daemon could not be reached; the transport error is the __cause__."""


class TransmissionAuthenticationError(TransmissionError):
    pass


class TransmissionProtocolError(TransmissionError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class TransmissionSessionError(TransmissionProtocolError):
    """The daemon kept answering 409 after the session id was renewed."""
