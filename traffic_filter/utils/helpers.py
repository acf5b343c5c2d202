import os
import sys
import logging

import yaml

logger = logging.getLogger(__name__)


def setup_logging(level=logging.INFO, log_file=None):
    """Set up logging configuration"""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logging.basicConfig(
        level=level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(log_format))
        logging.getLogger().addHandler(file_handler)

    return logging.getLogger('traffic_filter')


def load_config(config_path='config.yaml'):
    """Load configuration from YAML file"""
    default_config = {
        'logging': {
            'level': 'WARNING',
            'file': None
        },
        'dictionaries': {
            'path': None
        },
        'tree': {
            'initial_field': 'http'
        }
    }

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as file:
                user_config = yaml.safe_load(file)
                if user_config:
                    deep_merge(default_config, user_config)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.warning("Using default configuration")
    else:
        logger.info(f"Config file not found at {config_path}, using defaults")

    return default_config


def deep_merge(base, override):
    """Recursively merge two dictionaries"""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
