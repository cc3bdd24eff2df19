import base64
import logging
import threading

import requests

from transmission_rpc.errors import (
    TransmissionAuthenticationError,
    TransmissionConnectionError,
    TransmissionProtocolError,
    TransmissionSessionError,
)

DEFAULT_SCHEME = 'http'
DEFAULT_HOST = 'localhost'
DEFAULT_PORT = 9091
DEFAULT_PATH = '/transmission/rpc'
TOKEN_HEADER = 'X-Transmission-Session-Id'

# Keyword arguments of Session.send(); other options are set on the session itself
SEND_OPTIONS = ('timeout', 'allow_redirects')

logger = logging.getLogger('transmission_rpc.client')


class TransmissionClient:
    """Client for the Transmission JSON-RPC endpoint.

    Handles the X-Transmission-Session-Id handshake: a 409 answer carries the
    session id to use, which is stored and the call is sent again.
    """

    def __init__(self, scheme=DEFAULT_SCHEME, host=DEFAULT_HOST, port=DEFAULT_PORT, path=DEFAULT_PATH,
                 options=None, username=None, password=None, session_retries=1):
        self.scheme = str(scheme)
        self._host = str(host)
        self._port = DEFAULT_PORT if port is None else int(port)
        self._path = str(path)
        self._token = None
        self._lock = threading.Lock()
        self.auth = None
        self.session_retries = int(session_retries)
        self.send_options = {}
        self._transport = requests.Session()
        for option, value in (options or {}).items():
            self.set_option(option, value)
        if username and password:
            self.authenticate(username, password)
        elif username or password:
            logger.warning('Either username or password missing, not using authentication.')

    @classmethod
    def from_config(cls, config):
        return cls(
            scheme=config.get('scheme', DEFAULT_SCHEME),
            host=config.get('host', DEFAULT_HOST),
            port=config.get('port', DEFAULT_PORT),
            path=config.get('path', DEFAULT_PATH),
            options=config.get('options'),
            username=config.get('username'),
            password=config.get('password'),
            session_retries=config.get('session_retries', 1),
        )

    def set_option(self, option, value):
        if option in SEND_OPTIONS:
            self.send_options[option] = value
        elif hasattr(self._transport, option) and not callable(getattr(self._transport, option)):
            setattr(self._transport, option, value)
        else:
            raise ValueError(f'Unknown transport option: {option}')

    def authenticate(self, username, password):
        self.auth = base64.b64encode(f'{username}:{password}'.encode('utf-8')).decode('ascii')

    def call(self, method, arguments=None):
        if not method:
            raise ValueError('RPC method name must not be empty')
        if arguments is None:
            arguments = {}

        attempts = 0
        while True:
            response = self._send(method, arguments)
            if response.status_code != 409:
                return self._validate_response(response)
            if attempts >= self.session_retries:
                raise TransmissionSessionError(
                    f'Transmission rejected the session id {attempts + 1} times', status_code=409)
            self.token = response.headers.get(TOKEN_HEADER)
            logger.debug('Received new session id from Transmission')
            attempts += 1

    def add_torrent(self, torrent_url, paused=False, download_dir=None):
        arguments = {
            'filename': torrent_url,
            'paused': paused
        }
        if download_dir:
            arguments['download-dir'] = download_dir
        return self.call('torrent-add', arguments)

    def close(self):
        self._transport.close()

    def _compose(self, method, arguments):
        headers = {TOKEN_HEADER: self.token or ''}
        if self.auth is not None:
            headers['Authorization'] = f'Basic {self.auth}'
        request = requests.Request(
            'POST',
            self.rpc_url,
            headers=headers,
            json={'method': method, 'arguments': arguments},
        )
        return self.transport.prepare_request(request)

    def _send(self, method, arguments):
        request = self._compose(method, arguments)
        logger.debug(f'Sending {method} to {request.url}')
        try:
            return self.transport.send(request, **self.send_options)
        except (requests.exceptions.RequestException, OSError) as e:
            raise TransmissionConnectionError('Could not connect to Transmission') from e

    def _validate_response(self, response):
        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as e:
                raise TransmissionProtocolError(
                    'Invalid JSON received from Transmission', status_code=200) from e
        if response.status_code == 401:
            raise TransmissionAuthenticationError('Access to Transmission requires authentication')
        raise TransmissionProtocolError(
            f'Unexpected response received from Transmission: HTTP {response.status_code}',
            status_code=response.status_code)

    @property
    def url(self):
        return f'{self.scheme}://{self._host}:{self._port}'

    @property
    def rpc_url(self):
        return self.url + self._path

    @property
    def host(self):
        return self._host

    @host.setter
    def host(self, host):
        self._host = str(host)

    @property
    def port(self):
        return self._port

    @port.setter
    def port(self, port):
        self._port = DEFAULT_PORT if port is None else int(port)

    @property
    def path(self):
        return self._path

    @path.setter
    def path(self, path):
        self._path = str(path)

    @property
    def token(self):
        with self._lock:
            return self._token

    @token.setter
    def token(self, token):
        with self._lock:
            self._token = None if token is None else str(token)

    @property
    def transport(self):
        return self._transport

    @transport.setter
    def transport(self, transport):
        self._transport = transport
