"""robots.txt and sitemap.xml for the public site.

Private pages (profile, settings, admin) are disallowed for crawlers and
left out of the sitemap.
"""

from datetime import date
from xml.sax.saxutils import escape

DISALLOWED_PATHS = ("/admin/", "/profile/", "/settings/")

# (path, changefreq, priority)
SITEMAP_PAGES = (
    ("/", "daily", "1.0"),
    ("/login", "monthly", "0.8"),
    ("/register", "monthly", "0.8"),
    ("/contribute", "weekly", "0.9"),
    ("/leaderboard", "weekly", "0.7"),
    ("/my-contributions", "weekly", "0.5"),
)


def _absolute(base_url: str, path: str) -> str:
    base = base_url.rstrip("/")
    return base if path == "/" else f"{base}{path}"


def render_robots_txt(base_url: str) -> str:
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]
    lines += ["", f"Sitemap: {_absolute(base_url, '/sitemap.xml')}", ""]
    return "\n".join(lines)


def render_sitemap_xml(base_url: str, last_modified: date) -> str:
    entries = [
        "  <url>\n"
        f"    <loc>{escape(_absolute(base_url, path))}</loc>\n"
        f"    <lastmod>{last_modified.isoformat()}</lastmod>\n"
        f"    <changefreq>{freq}</changefreq>\n"
        f"    <priority>{priority}</priority>\n"
        "  </url>"
        for path, freq, priority in SITEMAP_PAGES
    ]
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(entries)
        + "\n</urlset>\n"
    )
