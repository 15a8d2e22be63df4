#!/usr/bin/env python3
"""
Helper script to (re)create the editor credential file (auth.json).
Run it while the server is stopped; the server only reads auth.json at startup.
"""

import hashlib
import secrets
import getpass
import sys
from pathlib import Path

ITERATIONS = 100000


def generate_password_hash(password, salt=None):
    """Generate a secure password hash using PBKDF2."""
    if salt is None:
        salt = secrets.token_hex(16)

    password_hash = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode(),
        salt.encode(),
        ITERATIONS
    ).hex()

    return salt, password_hash


def main(argv=None):
    # Imported here so the hashing helper stays dependency free
    from config_auth import save_credentials
    from settings import Config

    argv = sys.argv[1:] if argv is None else argv
    auth_path = Path(argv[0]) if argv else Config().AUTH_PATH

    print("=== Site Editor Password Setup ===\n")
    print(f"This will overwrite {auth_path}\n")

    password = getpass.getpass("Enter password: ")
    if not password:
        print("Password cannot be empty")
        return 1

    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("Passwords do not match!")
        return 1

    salt, password_hash = generate_password_hash(password)
    save_credentials(auth_path, password_hash, salt)

    print(f"\nCredentials written to {auth_path}")
    print("Restart the server to pick up the new password.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
