"""Constants for settingsgen"""

# ==================== File Paths ====================
DATABASE_PATH = "data/settings.db"
FILE_STORE_DIR_DEFAULT = "data/settings"
LOG_FILE_DEFAULT = "data/settingsgen.log"

# ==================== Page Defaults ====================
DEFAULT_CAPABILITY = "manage_options"
DEFAULT_MENU_ICON = "dashicons-admin-generic"
DEFAULT_SECTION_ID = "default"

# ==================== Value Patterns ====================
COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"
DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"
NUMERIC_PATTERN = r"^\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*$"
TEL_DISALLOWED_PATTERN = r"[^0-9+\-() ]"
# Attachment ids are capped at 18 digits
LEADING_INT_PATTERN = r"^\s*([+-]?[0-9]{1,18})"

COLOR_FALLBACK = "#000000"
DATE_PLACEHOLDER = "YYYY-MM-DD"

FALSY_STRINGS = frozenset({"", "0", "false", "off", "no"})

# ==================== Safe HTML ====================
ALLOWED_TAGS = frozenset(
    {
        "a", "abbr", "b", "blockquote", "br", "code", "del", "div", "em",
        "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "li", "ol",
        "p", "pre", "s", "span", "strong", "sub", "sup", "table", "tbody",
        "td", "th", "thead", "tr", "u", "ul",
    }
)
ALLOWED_ATTRIBUTES = {
    "*": frozenset({"class", "id", "title"}),
    "a": frozenset({"href", "target", "rel"}),
    "img": frozenset({"src", "alt", "width", "height"}),
    "td": frozenset({"colspan", "rowspan"}),
    "th": frozenset({"colspan", "rowspan", "scope"}),
}
DROPPED_WITH_CONTENT = frozenset({"script", "style", "iframe", "object", "embed", "noscript"})
ALLOWED_URL_SCHEMES = frozenset({"http", "https", "mailto"})

# ==================== Template Names ====================
TEMPLATE_DOCUMENT = "document.html"
TEMPLATE_PAGE = "page.html"
TEMPLATE_SECTION = "section.html"
TEMPLATE_FIELD = "fields/{type}.html"

# ==================== Database Configuration ====================
DB_MAX_CONNECTIONS = 20
DB_STALE_TIMEOUT = 300  # 5 minutes
DB_PRAGMAS = {
    "journal_mode": "wal",
    "synchronous": "NORMAL",
    "busy_timeout": 5000,
}
