from flask import Flask, render_template_string
import logging
from cdn_assets.cdn_helper import init_cdn

app = Flask(__name__)
init_cdn(app)

# Assets the page enqueues, as (handle, site-relative path)
STYLES = [
    ('wp-block-library', 'wp-includes/css/dist/block-library/style.min.css?ver=6.4.2'),
]

SCRIPTS = [
    ('jquery-core', 'wp-includes/js/jquery/jquery.min.js?ver=3.7.1'),
    ('react', 'wp-includes/js/dist/vendor/react.a1b2c3d4.min.js'),
]

PAGE = """<!doctype html>
<html>
<head>
{% for handle, src in styles %}<link rel="stylesheet" id="{{ handle }}-css" href="{{ src|style_loader_src(handle) }}">
{% endfor %}</head>
<body>
{% for handle, src in scripts %}<script id="{{ handle }}-js" src="{{ src|script_loader_src(handle) }}"></script>
{% endfor %}</body>
</html>
"""


# Routes
@app.route('/')
def index():
    site_url = app.config['SITE_URL']
    return render_template_string(
        PAGE,
        styles=[(handle, site_url + path) for handle, path in STYLES],
        scripts=[(handle, site_url + path) for handle, path in SCRIPTS],
    )


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    app.run(debug=True, host='0.0.0.0', port=5000)
