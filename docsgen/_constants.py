"""Common literal values used across docsgen.

These constants keep filenames and directive markers centralized so the
discovery, build, and test code import the same values without drifting.
Intended for internal use within the docsgen package.

Examples
--------
>>> from docsgen import _constants
>>> _constants.MARKER_FILENAME
'.docsgen'
>>> "@include: intro.md".startswith(_constants.INCLUDE_DIRECTIVE)
True
"""

INCLUDE_DIRECTIVE = "@include:"
MAX_INCLUDE_DEPTH = 5

MARKER_FILENAME = ".docsgen"
MARKER_CONTENT = "managed by docsgen"

TEMPLATE_FILENAME = "template.md"
NAV_FILENAME = "nav.md"
SITE_CONFIG_FILENAME = "site.md"
SEARCH_INDEX_FILENAME = "search.json"
PAGE_TEMPLATE_NAME = "page.html"
CODEHILITE_STYLESHEET = "assets/codehilite.css"

INDEX_SLUG = "index"
WELCOME_SLUG = "welcome"
DEFAULT_NAV_GROUP = "General"
DEFAULT_SITE_TITLE = "Srotas Space"
EXCERPT_LENGTH = 160
