import os
import sys
import json
from typing import Dict

from timeshift.provider import Context
from timeshift.utils import get_data_dir

DEFAULT_CONFIG = {
    'testing_mode': False,
    'timezone': 'UTC',
    'output_format': '%Y-%m-%d %H:%M:%S',
}


def get_config_file() -> str:
    return os.path.join(get_data_dir(create=False), 'config.json')


def load_config() -> Dict:
    """Load configuration, falling back to defaults for missing keys"""
    config = dict(DEFAULT_CONFIG)
    config_file = get_config_file()
    if not os.path.exists(config_file):
        return config

    try:
        with open(config_file, 'r') as f:
            loaded = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {str(e)}", file=sys.stderr)
        return config

    if isinstance(loaded, dict):
        config.update(loaded)
    return config


def get_testing_mode() -> bool:
    """Check if testing mode is enabled"""
    return bool(load_config().get('testing_mode', False))


def default_context() -> Context:
    """Context built from the configured timezone"""
    return Context(timezone=load_config().get('timezone') or 'UTC')
