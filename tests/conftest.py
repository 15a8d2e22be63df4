"""
Shared fixtures: every test gets its own site root under tmp_path.
"""

import io
from urllib.parse import urlsplit

import pytest

from api_server import create_app
from settings import Config

PASSWORD = 'correct horse battery staple'


@pytest.fixture
def config(tmp_path):
    config = Config()
    config.SITE_ROOT = tmp_path
    config.PASSWORD = PASSWORD
    return config


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def state(app):
    return app.extensions['site_editor']


@pytest.fixture
def public(config):
    return config.PUBLIC_DIR


@pytest.fixture
def token(client):
    response = client.post('/login', json={'password': PASSWORD})
    assert response.status_code == 200
    return response.get_data(as_text=True)


@pytest.fixture
def site_config():
    return {
        'siteTitle': 'My Gallery',
        'aboutTitle': 'About me',
        'aboutText': 'Photos from the road.',
        'cards': [
            {'imageName': 'a b.jpg', 'thumbnailName': 'a b.jpg',
             'title': 'Harbour at dusk', 'description': 'Long exposure'},
            {'imageName': 'c.png', 'thumbnailName': 'c.png',
             'title': 'Old mill', 'description': 'Film scan'},
        ],
        'socials': [
            {'name': 'instagram', 'link': 'https://instagram.com/me'},
            {'name': 'github', 'link': 'https://github.com/me'},
        ],
    }


def upload_data(*files):
    """Build test-client multipart data from (field, filename, content) triples."""
    data = {}
    for field, filename, content in files:
        data.setdefault(field, []).append((io.BytesIO(content), filename))
    return data


class FlaskSession:
    """Just enough of requests.Session on top of the Flask test client."""

    def __init__(self, client):
        self.client = client

    def get(self, url, params=None):
        return self.client.get(urlsplit(url).path, query_string=params)

    def post(self, url, params=None, json=None, files=None):
        kwargs = {'query_string': params}
        if json is not None:
            kwargs['json'] = json
        if files is not None:
            data = {}
            for field, (filename, content, mimetype) in files:
                data.setdefault(field, []).append((io.BytesIO(content), filename, mimetype))
            kwargs['data'] = data
            kwargs['content_type'] = 'multipart/form-data'
        return self.client.post(urlsplit(url).path, **kwargs)
