"""Common literal values used across llms_index.

These constants keep filenames, plugin identifiers, and default selector lists
centralized so the resolver, generators, and tests can import the same values
without drifting. Intended for internal use within the llms_index package.

Examples
--------
>>> from llms_index import _constants
>>> _constants.LLMS_TXT_FILENAME
'llms.txt'
>>> "/search" in _constants.DEFAULT_EXCLUDE_ROUTES
True
"""

LLMS_TXT_FILENAME = "llms.txt"
LLMS_FULL_TXT_FILENAME = "llms-full.txt"
COPY_CONTENT_FILENAME = "llms-txt-copy-content.json"
COPY_BUTTON_SETTINGS_FILENAME = "llms-txt-copy-button.json"
DEFAULT_AI_PROMPT = "Analyze this documentation:"
CACHE_FILENAME = ".llms-index-cache.json"
CACHE_VERSION = 1

PLUGIN_NAME = "llms-index"
DEFAULT_SITE_TITLE = "Documentation"

BLOG_PLUGIN = "docusaurus-plugin-content-blog"
PAGES_PLUGIN = "docusaurus-plugin-content-pages"
DOC_ITEM_COMPONENT = "@theme/DocItem"
BLOG_COMPONENTS = frozenset({"@theme/BlogListPage", "@theme/BlogPostPage"})

ROOT_ROUTE_PATH = "/"
INDEX_ROUTE_PATH = "/index"
INDEX_MD = "/index.md"

ATTACHMENTS_SECTION_ID = "attachments"
ATTACHMENTS_SECTION_NAME = "Attachments"
ATTACHMENTS_URL_PREFIX = "/assets/llms-txt/attachments"
OPTIONAL_SECTION_NAME = "Optional"

DEFAULT_EXCLUDE_ROUTES: tuple[str, ...] = ("/search", "/404.html")
DEFAULT_CONTENT_SELECTORS: tuple[str, ...] = (
    ".theme-doc-markdown",
    "main .container .col",
    "main .theme-doc-wrapper",
    "article",
    "main .container",
    "main",
)

MAX_HEADING_LEVEL = 6
SECTION_ID_PATTERN = r"^[a-z0-9-]+$"
SEVERITIES = ("ignore", "log", "warn", "throw")
