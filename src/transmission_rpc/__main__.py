import json
import logging
import sys

import yaml

from transmission_rpc.config_loader import ConfigLoader
from transmission_rpc.errors import TransmissionError

USAGE = 'usage: transmission-rpc CONFIG METHOD [ARGUMENTS_JSON]'

logger = logging.getLogger('transmission_rpc')


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) not in (2, 3):
        print(USAGE, file=sys.stderr)
        return 2
    config_path, method = argv[0], argv[1]
    try:
        arguments = json.loads(argv[2]) if len(argv) == 3 else {}
    except ValueError as e:
        print(f'Invalid arguments JSON: {e}', file=sys.stderr)
        return 2
    if not isinstance(arguments, dict):
        print('Arguments must be a JSON object', file=sys.stderr)
        return 2

    try:
        client = ConfigLoader(config_path).create_client()
    except (OSError, yaml.YAMLError) as e:
        print(f'Could not load config {config_path}: {e}', file=sys.stderr)
        return 2
    except ValueError as e:
        print(f'Invalid config {config_path}: {e}', file=sys.stderr)
        return 2
    try:
        result = client.call(method, arguments)
    except TransmissionError as e:
        logger.error(f'Call to {method} failed: {e}')
        return 1
    finally:
        client.close()
    print(json.dumps(result, indent=2))
    return 0


def run():
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())


if __name__ == '__main__':
    run()
