"""
CDN integration helper for script and style assets.

Rewrites same-host WordPress.org asset URLs to s.w.org. Only URLs that:
  - live under the site root and on a *wordpress.org domain (local
    environments and other hosts are left alone),
  - are not on profiles.wordpress.org, which has its own docroot,
  - carry a ?ver= cache buster and no other query parameters
are rewritten. Along the way ver= becomes the file modification time where
it isn't a timestamp already, and in production it is chunked into a
two-minute window so servers deployed a little apart agree on the URL.
"""
import os
import re
import time
import logging
from urllib.parse import parse_qsl, urlencode, urlsplit

from flask import current_app, has_request_context, request

from cdn_assets.cache import bucket_version, is_timestamp
from cdn_assets.config import init_config

logger = logging.getLogger(__name__)

CDN_HOST = 's.w.org'

# Webpack builds (react etc.) put the cache buster in the filename
WEBPACK_HASH_RE = re.compile(r'\.([a-f0-9]{8})\.(min\.)?js$')


def get_filemtime(path):
    """Modification time of path, or None if it can't be read"""
    try:
        return int(os.path.getmtime(path))
    except (OSError, ValueError) as e:
        logger.debug(f"No mtime for {path}: {e}")
        return None


def parse_asset_url(relative_url):
    """Split a site-relative URL into its file path and query args"""
    if '?' in relative_url:
        filepath, query = relative_url.split('?', 1)
        # Repeated keys keep the last value
        url_args = dict(parse_qsl(query, keep_blank_values=True, separator='&'))
    else:
        filepath = relative_url
        url_args = {}
        match = WEBPACK_HASH_RE.search(filepath)
        if match:
            url_args = {'ver': match.group(1)}
    return filepath, url_args


def rewrite(link, site_root, request_host, environment, filemtime_lookup, now,
            abspath='', use_cdn_override=False):
    """
    Rewrite an asset URL onto the CDN with a normalised cache buster.

    Returns `link` untouched whenever it isn't eligible; this never raises
    for string input, callers always get a usable URL back.
    """
    if not isinstance(link, str):
        return link

    # Only same-host resources, and WordPress.org domains
    if (
        not link.startswith(site_root)
        or 'wordpress.org' not in link
        or 'profiles.wordpress.org' in link
    ):
        logger.debug(f"Skipping non-CDN asset {link}")
        return link

    filepath, url_args = parse_asset_url(link[len(site_root):])

    # No cache buster, or extra args
    ver = url_args.get('ver')
    if not ver or ver == '0' or len(url_args) > 1:
        logger.debug(f"Skipping asset without a lone ver= arg: {link}")
        return link

    version = None
    if not is_timestamp(ver, now):
        try:
            version = filemtime_lookup(abspath + filepath)
        except OSError as e:
            logger.debug(f"mtime lookup failed for {filepath}: {e}")
            version = None
    if not version or version <= 0:
        version = ver

    production = environment == 'production'
    if production and is_timestamp(version, now):
        version = bucket_version(version)

    use_cdn = production or bool(use_cdn_override)
    host = CDN_HOST if use_cdn else request_host

    return f"https://{host}/{filepath}?{urlencode({'ver': version})}"


def _request_host(site_root):
    if has_request_context() and request.host:
        return request.host
    return urlsplit(site_root).netloc


def with_filemtime_cachebuster(link, handle=''):
    """Filter callback for style_loader_src / script_loader_src"""
    config = current_app.config
    if handle and handle in config.get('CDN_EXCLUDED_HANDLES', []):
        return link

    site_root = config['SITE_URL']
    return rewrite(
        link,
        site_root=site_root,
        request_host=_request_host(site_root),
        environment=config['WP_ENVIRONMENT_TYPE'],
        filemtime_lookup=get_filemtime,
        now=int(time.time()),
        abspath=config['ABSPATH'],
        use_cdn_override=config['USE_WPORG_CDN'],
    )


def init_cdn(app):
    """Register the asset URL filters on a Flask app"""
    init_config(app)
    app.add_template_filter(with_filemtime_cachebuster, 'style_loader_src')
    app.add_template_filter(with_filemtime_cachebuster, 'script_loader_src')
    app.extensions['cdn_assets'] = with_filemtime_cachebuster
