#!/usr/bin/env python3
"""
Quick smoke check for a running site editor.
Logs in, uploads a staging image, renders a preview and reads it back.

Usage: python smoke_api.py http://localhost:5000 <password>
"""

import sys

import requests

SAMPLE_CONFIG = {
    "siteTitle": "Smoke Test",
    "aboutTitle": "About",
    "aboutText": "Generated by smoke_api.py",
    "cards": [
        {"imageName": "smoke.png", "thumbnailName": "smoke.png",
         "title": "Smoke card", "description": "Uploaded by the smoke check"}
    ],
    "socials": [{"name": "github", "link": "https://github.com"}],
}

# Minimal PNG signature, the server does not inspect image content
SAMPLE_PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def check_login(session, base_url, password):
    """Test POST /login, returns the session token."""
    print("\n=== Testing POST /login ===")
    response = session.post(f"{base_url}/login", json={"password": password})
    print(f"Status: {response.status_code}")
    if response.status_code != 200:
        print(f"Error: {response.text}")
        return None
    return response.text


def check_rejects_bad_token(session, base_url):
    """Test that an unknown token is refused."""
    print("\n=== Testing GET /edit with a bad token ===")
    response = session.get(f"{base_url}/edit", params={"token": "not-a-token"})
    print(f"Status: {response.status_code}")
    return response.status_code == 403


def check_upload(session, base_url, token):
    """Test POST /upload-images?mode=tmp"""
    print("\n=== Testing POST /upload-images (mode=tmp) ===")
    response = session.post(
        f"{base_url}/upload-images",
        params={"token": token, "mode": "tmp"},
        files=[
            ("tmp-full", ("smoke.png", SAMPLE_PNG, "image/png")),
            ("tmp-thumb", ("smoke.png", SAMPLE_PNG, "image/png")),
        ],
    )
    print(f"Status: {response.status_code}")
    if response.status_code != 200:
        print(f"Error: {response.text}")
    return response.status_code == 200


def check_preview(session, base_url, token):
    """Test POST /preview then GET /preview"""
    print("\n=== Testing POST /preview ===")
    response = session.post(f"{base_url}/preview", params={"token": token}, json=SAMPLE_CONFIG)
    print(f"Status: {response.status_code}")
    if response.status_code != 200:
        print(f"Error: {response.text}")
        return False

    print("\n=== Testing GET /preview ===")
    response = session.get(f"{base_url}/preview", params={"token": token})
    print(f"Status: {response.status_code}")
    return response.status_code == 200 and "Smoke card" in response.text


def run_smoke(base_url, password, session=None):
    """Run every check in order. Returns True when all of them pass."""
    session = session or requests.Session()
    base_url = base_url.rstrip('/')

    token = check_login(session, base_url, password)
    if not token:
        print("\n[ERROR] Login failed, remaining checks skipped.")
        return False

    results = [
        check_rejects_bad_token(session, base_url),
        check_upload(session, base_url, token),
        check_preview(session, base_url, token),
    ]
    print(f"\n=== {sum(results)}/{len(results)} checks passed ===")
    return all(results)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 2:
        print(__doc__)
        return 2

    print("=== Site Editor Smoke Check ===")
    try:
        return 0 if run_smoke(argv[0], argv[1]) else 1
    except requests.exceptions.ConnectionError:
        print("\n[ERROR] Could not connect to the server.")
        print("Make sure the server is running: python api_server.py")
        return 1


if __name__ == '__main__':
    sys.exit(main())
