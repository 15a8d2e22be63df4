"""
Turns a site configuration document into the static gallery page.
Text values are inserted as written, so editors may use inline markup.
"""

from urllib.parse import quote


def text(value):
    """None -> '', anything else -> its string form."""
    return '' if value is None else str(value)


def capitalize(name):
    """'instagram' -> 'Instagram' (only the first letter changes)."""
    name = text(name)
    return name[:1].upper() + name[1:]


def render_card(card, img_root):
    full = quote(text(card.get('imageName')), safe='')
    thumb = quote(text(card.get('thumbnailName')), safe='')
    return f"""<article class="thumb">
                <a href="{img_root}/fulls/{full}" class="image"><img src="{img_root}/thumbs/{thumb}" alt="" /></a>
                <h2>{text(card.get('title'))}</h2>
                <p>{text(card.get('description'))}</p>
            </article>
"""


def render_social(social):
    link = social.get('link')
    if link is None:
        return ''
    name = text(social.get('name'))
    return (f'<li><a href="{text(link)}" class="icon brands fa-{name}">'
            f'<span class="label">{capitalize(name)}</span></a></li>\n')


def generate_html(meta, img_root):
    """Render the page; img_root is 'images' for the site, 'tmp' for previews."""
    cards = ''.join(render_card(card, img_root) for card in meta.get('cards') or [])
    socials = ''.join(render_social(social) for social in meta.get('socials') or [])
    site_title = text(meta.get('siteTitle'))

    return f"""<!DOCTYPE HTML>
<html>
    <head>
        <title>{site_title}</title>
        <meta charset="utf-8" />
        <meta name="viewport" content="width=device-width, initial-scale=1, user-scalable=no" />
        <link rel="stylesheet" href="assets/css/main.css" />
        <noscript><link rel="stylesheet" href="assets/css/noscript.css" /></noscript>
    </head>
    <body class="is-preload">

        <!-- Wrapper -->
            <div id="wrapper">

                <!-- Header -->
                    <header id="header">
                        <h1><a href="index.html"><strong>{site_title}</strong></a></h1>
                        <nav>
                            <ul>
                                <li><a href="#footer" class="icon solid fa-info-circle">About</a></li>
                            </ul>
                        </nav>
                    </header>

                <!-- Main -->
                    <div id="main">
                        {cards}
                    </div>

                <!-- Footer -->
                    <footer id="footer" class="panel">
                        <div class="inner split">
                            <div>
                                <section>
                                    <h2>{text(meta.get('aboutTitle'))}</h2>
                                    <p>{text(meta.get('aboutText'))}</p>
                                </section>
                                <section>
                                    <h2>Follow me on ...</h2>
                                    <ul class="icons">
                                        {socials}
                                    </ul>
                                </section>
                                <p class="copyright">
                                    Design: <a href="http://html5up.net">HTML5 UP</a>.
                                </p>
                            </div>
                        </div>
                    </footer>

            </div>

        <!-- Scripts -->
            <script src="assets/js/jquery.min.js"></script>
            <script src="assets/js/jquery.poptrox.min.js"></script>
            <script src="assets/js/browser.min.js"></script>
            <script src="assets/js/breakpoints.min.js"></script>
            <script src="assets/js/util.js"></script>
            <script src="assets/js/main.js"></script>

    </body>
</html>
"""
