"""
Error types for the site editor and the Flask handler that renders them.
Every error carries the HTTP status and a short message for the client.
"""

import logging

logger = logging.getLogger(__name__)


class SiteEditorError(Exception):
    status = 500
    message = 'Internal server error'

    def __init__(self, message=None, status=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status is not None:
            self.status = status


class AuthError(SiteEditorError):
    """Invalid or expired session token, or a bad password."""
    status = 403
    message = 'Forbidden'


class ValidationError(SiteEditorError):
    status = 400
    message = 'Bad request'


class UploadTooLargeError(ValidationError):
    status = 413
    message = 'Exceeded max upload size (500 MB).'


class FatalIOError(SiteEditorError):
    """Filesystem failure the current request cannot recover from."""
    status = 500
    message = 'Storage failure'


class CredentialError(FatalIOError):
    """The editor password could not be loaded or derived at startup."""
    message = 'No editor password set.'


def register_error_handler(app):
    @app.errorhandler(SiteEditorError)
    def handle_site_editor_error(err):
        if err.status >= 500:
            logger.error(f"[ERROR] {err.message} ({err.__cause__ or 'no cause'})")
        else:
            logger.info(f"Request rejected with {err.status}: {err.message}")
        return err.message, err.status
