import yaml

from transmission_rpc.client import TransmissionClient


class ConfigLoader:
    def __init__(self, config_path):
        self.config_path = config_path
        self.config = self.load_config()

    def load_config(self):
        with open(self.config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_option(self, key, default=None):
        return self.config.get(key, default)

    def get_client_config(self):
        server = self.get_option('server') or {}
        login = self.get_option('login') or {}
        client_opts = self.get_option('client') or {}
        config = {
            'scheme': server.get('scheme', 'http'),
            'host': server.get('host', 'localhost'),
            'port': server.get('port', 9091),
            'path': server.get('rpc_path', '/transmission/rpc'),
            'options': dict(client_opts),
            'username': login.get('username'),
            'password': login.get('password'),
        }
        if 'session_retries' in self.config:
            config['session_retries'] = self.config['session_retries']
        return config

    def create_client(self):
        return TransmissionClient.from_config(self.get_client_config())
