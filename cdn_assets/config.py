"""
Environment-driven settings for the CDN asset filters
"""
import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENVIRONMENT_TYPES = ('local', 'development', 'staging', 'production')
DEFAULT_ENVIRONMENT = 'production'

DEFAULT_SITE_URL = 'https://wordpress.org/'


def get_environment_type(value):
    """Normalise an environment type, unknown values count as production"""
    env = (value or '').strip().lower()
    if env in ENVIRONMENT_TYPES:
        return env
    if env:
        logger.debug(f"Unknown environment type {value!r}, using {DEFAULT_ENVIRONMENT}")
    return DEFAULT_ENVIRONMENT


def parse_bool(value):
    if isinstance(value, bool):
        return value
    return str(value or '').strip().lower() in ('1', 'true', 'yes', 'on')


def parse_handles(value):
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [handle.strip() for handle in value if handle and handle.strip()]


def trailingslashit(value):
    return value.rstrip('/') + '/'


def load_settings():
    """Read the CDN settings from the environment (and .env, if present)"""
    load_dotenv()
    return {
        'SITE_URL': trailingslashit(os.getenv('SITE_URL', DEFAULT_SITE_URL)),
        'ABSPATH': trailingslashit(os.getenv('ABSPATH', os.getcwd())),
        'WP_ENVIRONMENT_TYPE': get_environment_type(os.getenv('WP_ENVIRONMENT_TYPE')),
        'USE_WPORG_CDN': parse_bool(os.getenv('USE_WPORG_CDN', 'False')),
        'CDN_EXCLUDED_HANDLES': parse_handles(os.getenv('CDN_EXCLUDED_HANDLES', '')),
    }


def init_config(app):
    """Copy the settings onto app.config without clobbering explicit values"""
    for key, value in load_settings().items():
        app.config.setdefault(key, value)
    app.config['SITE_URL'] = trailingslashit(app.config['SITE_URL'])
    app.config['ABSPATH'] = trailingslashit(app.config['ABSPATH'])
    app.config['WP_ENVIRONMENT_TYPE'] = get_environment_type(app.config['WP_ENVIRONMENT_TYPE'])
    app.config['USE_WPORG_CDN'] = parse_bool(app.config['USE_WPORG_CDN'])
    app.config['CDN_EXCLUDED_HANDLES'] = parse_handles(app.config['CDN_EXCLUDED_HANDLES'])
