"""Common literal values used across mdsite.

These constants keep artifact filenames, section folder names and markers
centralized so the scanner, generators, and tests can import the same values
without drifting. Intended for internal use within the mdsite package.

Examples
--------
>>> from mdsite import _constants
>>> _constants.PLACEHOLDER_TEMPLATE.format(placeholder_id="comp_0")
'<!--component:comp_0-->'
>>> "blog" in _constants.HARDCODED_SECTIONS
True
"""

PLACEHOLDER_TEMPLATE = "<!--component:{placeholder_id}-->"

BLOG_FOLDER = "blog"
PROJECTS_FOLDER = "projects"
FEATURES_FOLDER = "features"
ARTICLES_FOLDER = "articles"
DOCS_FOLDER = "docs"
HARDCODED_SECTIONS = frozenset(
    {BLOG_FOLDER, PROJECTS_FOLDER, FEATURES_FOLDER, ARTICLES_FOLDER, DOCS_FOLDER}
)

CONTENT_FILE_SUFFIXES = (".md", ".mdx")
CONTENT_GLOB = "*.md*"
PROJECT_INDEX_FILE = "index.md"

SITE_CONFIG_FILENAME = "site.config.json"
SEARCH_INDEX_FILENAME = "search-index.json"
SITEMAP_FILENAME = "sitemap.xml"
ROBOTS_FILENAME = "robots.txt"
FEED_FILENAME = "feed.xml"

DEFAULT_SEARCH_CONTENT_MAX_LENGTH = 10000
MAX_FEED_ITEMS = 20
