"""
Flask server for the single-user site editor.

Run with: python api_server.py   (PASSWORD is required on the first start)
"""

import json
import logging
import sys
import tempfile
import zipfile
from functools import wraps

from flask import Flask, current_app, request, send_file, send_from_directory
from flask_cors import CORS

from config_auth import CredentialStore
from directory_guard import (ensure_asset_dirs, ModeLocks, reset_for_mode,
                             validate_mode, verify_content_length)
from errors import AuthError, FatalIOError, ValidationError, register_error_handler
from settings import Config, configure_logging
from site_renderer import generate_html
from token_store import TokenStore
from upload_router import place_batch

logger = logging.getLogger(__name__)

# Archives larger than this are written to a temporary file
ARCHIVE_SPOOL_SIZE = 16 * 1024 * 1024


class EditorState:
    """Process-wide objects shared by all requests."""

    def __init__(self, config):
        self.config = config
        self.credentials = CredentialStore.load_or_create(config.AUTH_PATH, config.PASSWORD)
        self.token_store = TokenStore(config.TOKEN_TIMEOUT_MS, config.MAX_TOKENS)
        self.mode_locks = ModeLocks()


def editor():
    return current_app.extensions['site_editor']


def require_auth(f):
    """Decorator to require a valid ?token= for routes."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not editor().token_store.is_valid(request.args.get('token')):
            raise AuthError()
        return f(*args, **kwargs)

    return decorated_function


# =======================================================================
# HELPERS
# =======================================================================
def send_page(name):
    """Serve an override from the site root, else the bundled template."""
    config = editor().config
    if (config.SITE_ROOT / name).is_file():
        return send_from_directory(config.SITE_ROOT, name)
    return send_from_directory(config.TEMPLATES_DIR, name)


def write_text(path, text):
    try:
        path.write_text(text, encoding='utf-8')
    except OSError as e:
        raise FatalIOError(f"Could not write {path.name}") from e


def site_config_from_request():
    meta = request.get_json(silent=True)
    if not isinstance(meta, dict):
        raise ValidationError("Invalid site configuration.")
    for key in ('cards', 'socials'):
        entries = meta.get(key) or []
        if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
            raise ValidationError(f"Invalid site configuration: {key} must be a list of objects.")
    return meta


def collect_files(files, max_per_field):
    """Flatten request.files into (field, FileStorage) pairs, enforcing the per-field cap."""
    collected = []
    for field in files:
        storages = files.getlist(field)
        if len(storages) > max_per_field:
            raise ValidationError(f"Too many files for {field} (max {max_per_field}).")
        collected.extend((field, storage) for storage in storages)
    return collected


def build_image_archive(public_root):
    """Zip images/fulls and images/thumbs, spilling to disk past ARCHIVE_SPOOL_SIZE."""
    buffer = tempfile.SpooledTemporaryFile(max_size=ARCHIVE_SPOOL_SIZE)
    try:
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
            for folder, arcname in (('images/fulls', 'fulls'), ('images/thumbs', 'thumbs')):
                directory = public_root / folder
                if not directory.is_dir():
                    logger.warning(f"Missing {folder}, not included in archive")
                    continue
                for entry in sorted(directory.iterdir()):
                    if entry.is_file():
                        archive.write(entry, f"{arcname}/{entry.name}")
    except OSError as e:
        buffer.close()
        raise FatalIOError("Could not build image archive") from e
    buffer.seek(0)
    return buffer


# =======================================================================
# APPLICATION
# =======================================================================
def create_app(config=None):
    config = config or Config()
    ensure_asset_dirs(config.PUBLIC_DIR)

    # public/ is served at the site root, like the generated page expects
    app = Flask(__name__, static_folder=str(config.PUBLIC_DIR), static_url_path='')
    app.config['MAX_CONTENT_LENGTH'] = config.MAX_UPLOAD
    app.extensions['site_editor'] = EditorState(config)

    CORS(app, resources={r"/*": {"origins": config.CORS_ORIGINS}})
    register_error_handler(app)
    register_routes(app)
    return app


def register_routes(app):

    # ===================================================================
    # PAGES
    # ===================================================================
    @app.route('/', methods=['GET'])
    def index():
        return send_page('index.html')

    @app.route('/login', methods=['GET'])
    def login_page():
        return send_page('login.html')

    @app.route('/edit', methods=['GET'])
    @require_auth
    def edit_page():
        return send_page('edit.html')

    # ===================================================================
    # AUTHENTICATION
    # ===================================================================
    @app.route('/login', methods=['POST'])
    def login():
        """Check the editor password and return a session token."""
        data = request.get_json(silent=True)
        password = data.get('password') if isinstance(data, dict) else None

        if not editor().credentials.verify(password):
            logger.info(f"[AUTH] Failed login attempt from {request.remote_addr}")
            raise AuthError("Unauthorized", 401)

        token = editor().token_store.issue()
        timeout_h = editor().token_store.timeout_ms / 3600000
        logger.info(f"[AUTH] Editor logged in (token expires in {timeout_h:.1f} hours)")
        return token

    # ===================================================================
    # DOWNLOADS
    # ===================================================================
    @app.route('/download-img', methods=['GET'])
    @require_auth
    def download_images():
        state = editor()
        with state.mode_locks.hold('main'):
            archive = build_image_archive(state.config.PUBLIC_DIR)
        return send_file(archive, mimetype='application/zip',
                         as_attachment=True, download_name='index_images.zip')

    @app.route('/download-conf', methods=['GET'])
    @require_auth
    def download_config():
        config = editor().config
        return send_from_directory(config.SITE_ROOT, config.SITE_CONFIG_PATH.name)

    # ===================================================================
    # UPLOADS
    # ===================================================================
    @app.route('/upload-images', methods=['POST'])
    @require_auth
    def upload_images():
        """Replace the staging (mode=tmp) or published (mode=main) images."""
        state = editor()
        config = state.config

        # Nothing is deleted until every check has passed
        verify_content_length(request.content_length, config.MAX_UPLOAD)
        mode = validate_mode(request.args.get('mode'))
        files = collect_files(request.files, config.MAX_FILES_PER_FIELD)

        with state.mode_locks.hold(mode):
            reset_for_mode(config.PUBLIC_DIR, mode)
            placements = place_batch(config.PUBLIC_DIR, files)

        failed = [p for p in placements if not p.ok]
        if failed:
            raise FatalIOError(f"Could not store {len(failed)} of {len(placements)} file(s).")

        logger.info(f"[UPLOAD] Stored {len(placements)} file(s) (mode={mode})")
        return "Success"

    # ===================================================================
    # SITE CONFIGURATION
    # ===================================================================
    @app.route('/update', methods=['POST'])
    @require_auth
    def update_site():
        """Persist the site configuration and regenerate the published page."""
        config = editor().config
        meta = site_config_from_request()
        # Render first so a failure leaves both files untouched
        html = generate_html(meta, 'images')
        write_text(config.SITE_CONFIG_PATH, json.dumps(meta, indent=2))
        write_text(config.SITE_ROOT / 'index.html', html)
        logger.info(f"Site updated ({len(meta.get('cards') or [])} cards)")
        return "Success"

    @app.route('/preview', methods=['POST'])
    @require_auth
    def update_preview():
        config = editor().config
        meta = site_config_from_request()
        write_text(config.SITE_ROOT / 'preview.html', generate_html(meta, 'tmp'))
        return "Success"

    @app.route('/preview', methods=['GET'])
    @require_auth
    def preview():
        return send_from_directory(editor().config.SITE_ROOT, 'preview.html')


def main():
    config = Config()
    configure_logging(config.LOG_LEVEL)
    try:
        app = create_app(config)
    except FatalIOError as e:
        logger.critical(f"Cannot start: {e}")
        return 1

    logger.info(f"Starting site editor on http://{config.HOST}:{config.PORT}")
    app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT, threaded=True)
    return 0


if __name__ == '__main__':
    sys.exit(main())
