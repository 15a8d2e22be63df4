from site_renderer import capitalize, generate_html


def test_cards_and_socials_rendered(site_config):
    html = generate_html(site_config, 'images')

    assert '<title>My Gallery</title>' in html
    assert 'About me' in html
    assert 'Photos from the road.' in html
    for card in site_config['cards']:
        assert card['title'] in html
        assert card['description'] in html
    assert '<span class="label">Instagram</span>' in html
    assert 'class="icon brands fa-github"' in html


def test_image_names_are_url_encoded(site_config):
    html = generate_html(site_config, 'images')
    assert 'href="images/fulls/a%20b.jpg"' in html
    assert 'src="images/thumbs/a%20b.jpg"' in html


def test_preview_uses_staging_root(site_config):
    html = generate_html(site_config, 'tmp')
    assert 'href="tmp/fulls/c.png"' in html
    assert 'images/fulls' not in html


def test_socials_without_link_are_skipped(site_config):
    site_config['socials'].append({'name': 'twitter', 'link': None})
    html = generate_html(site_config, 'images')
    assert 'fa-twitter' not in html


def test_text_is_inserted_as_written():
    html = generate_html({'aboutText': 'Shot on <em>film</em>', 'cards': [
        {'imageName': 'a.jpg', 'thumbnailName': 'a.jpg', 'title': 'Fish & Chips', 'description': ''},
    ]}, 'images')
    assert '<h2>Fish & Chips</h2>' in html
    assert '<p>Shot on <em>film</em></p>' in html


def test_null_and_non_string_values_render():
    html = generate_html({
        'siteTitle': None,
        'cards': [{'imageName': None, 'thumbnailName': 7, 'title': None, 'description': 2024}],
        'socials': [{'name': None, 'link': 'https://example.com'}],
    }, 'images')
    assert '<title></title>' in html
    assert 'src="images/thumbs/7"' in html
    assert '<p>2024</p>' in html
    assert '<span class="label"></span>' in html


def test_missing_lists_render_empty_page():
    html = generate_html({'siteTitle': 'Empty'}, 'images')
    assert '<article' not in html
    assert '<li><a href=' not in html


def test_capitalize():
    assert capitalize('instagram') == 'Instagram'
    assert capitalize('') == ''
    assert capitalize('gitHub') == 'GitHub'
