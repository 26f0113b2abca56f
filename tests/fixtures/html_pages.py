"""
HTML pages used by the document-based scrapers (Vixcloud, TMDB, IMDb).
"""

import json

VIXCLOUD_PLAYER_PAGE = """
<html><head>
<script>
    window.video = {"id": 777, "name": "My Show Ep 1"};
    window.streams = [{"name":"Server1","active":false,"url":"https://vixcloud.co/playlist/777?ub=1"},{"name":"Server2","active":true,"url":"https://au-d1-01.vixcloud.co/playlist/777"}];
    window.masterPlaylist = {
        params: {
            'token': 'abc123',
            'expires': '1700000000',
        },
        url: 'https://vixcloud.co/playlist/777',
    }
    window.canPlayFHD = true
</script>
</head><body></body></html>
"""

VIXCLOUD_PAGE_WITHOUT_STREAMS = """
<html><head>
<script>window.masterPlaylist = { params: {'token':'tok','expires':'99'}, url: '' }</script>
</head></html>
"""

VIXCLOUD_PAGE_WITHOUT_PARAMS = "<html><head><script>window.video = {};</script></head></html>"

TMDB_IMAGES_PAGE_IT = """
<html><head>
<meta property="og:title" content="Squid Game">
<meta property="og:description" content="Sfide mortali.">
<meta property="og:image" content="https://media.themoviedb.org/t/p/w500/poster.jpg">
<meta property="og:image" content="https://media.themoviedb.org/t/p/w500/backdrop.jpg">
</head><body>
<ul class="images logos">
  <li><a class="image" href="/t/p/original/logo.png">logo</a></li>
</ul>
</body></html>
"""

TMDB_IMAGES_PAGE_NO_LOGO = """
<html><head>
<meta property="og:title" content="Squid Game">
<meta property="og:image" content="https://media.themoviedb.org/t/p/w500/poster.jpg">
</head><body></body></html>
"""

TMDB_IMAGES_PAGE_EN = """
<html><head>
<meta property="og:title" content="Squid Game">
<meta property="og:image" content="https://media.themoviedb.org/t/p/w500/poster-en.jpg">
<meta property="og:image" content="https://media.themoviedb.org/t/p/w500/backdrop-en.jpg">
</head><body>
<ul class="images logos">
  <li><a class="image" href="/t/p/original/logo-en.PNG">logo</a></li>
</ul>
</body></html>
"""

TMDB_POSTERS_PAGE = """
<html><body>
<ul class="images posters">
  <li><div class="image_content"><a href="/t/p/original/clean1.jpg">1</a></div></li>
  <li><div class="image_content"><a href="/t/p/original/vector.svg">2</a></div></li>
  <li><div class="image_content"><a href="/t/p/original/clean2.jpg">3</a></div></li>
</ul>
</body></html>
"""

IMDB_TITLE_PAGE = (
    "<html><head><script type=\"application/ld+json\">"
    + json.dumps(
        {
            "@type": "TVSeries",
            "image": "https://m.media-amazon.com/images/M/squid.jpg",
            "description": "Hundreds of cash-strapped players...",
            "aggregateRating": {"ratingValue": 8.0},
        }
    )
    + "</script></head><body></body></html>"
)

IMDB_PAGE_WITHOUT_LD = "<html><head><title>IMDb</title></head></html>"
