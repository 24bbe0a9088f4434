"""Server-rendered pages: landing page, robots.txt, sitemap.xml."""

from app.pages.root import render_root_page
from app.pages.seo import render_robots_txt, render_sitemap_xml

__all__ = ["render_robots_txt", "render_root_page", "render_sitemap_xml"]
