from transmission_rpc.client import TransmissionClient
from transmission_rpc.config_loader import ConfigLoader
from transmission_rpc.errors import (
    TransmissionError,
    TransmissionConnectionError,
    TransmissionAuthenticationError,
    TransmissionProtocolError,
    TransmissionSessionError,
)

__all__ = [
    'TransmissionClient',
    'ConfigLoader',
    'TransmissionError',
    'TransmissionConnectionError',
    'TransmissionAuthenticationError',
    'TransmissionProtocolError',
    'TransmissionSessionError',
]
