"""
Global constants for treezip.
"""

# Export defaults
DEFAULT_FILENAME_PREFIX = "lb_template"
DEFAULT_BUTTON_LABEL = "Export"
DEFAULT_OUTPUT_DIR = "."
ARCHIVE_SUFFIX = ".zip"

# Name used when a root resolves to a single file instead of a folder
DEFAULT_ROOT_LEAF_NAME = "index.html"

# Extensions that are always stored as text
TEXT_EXTENSIONS = ("html", "css")

# Consecutive provider substitutions allowed before giving up
DEFAULT_MAX_PROVIDER_DEPTH = 32

# Bytes written per progress bar step when saving an archive
SAVE_CHUNK_SIZE = 64 * 1024

# External libraries linked by the default template
DEFAULT_CANVAS_STYLES = (
    "https://stackpath.bootstrapcdn.com/bootstrap/4.1.3/css/bootstrap.min.css",
)
DEFAULT_CANVAS_SCRIPTS = (
    "https://code.jquery.com/jquery-3.3.1.slim.min.js",
    "https://cdnjs.cloudflare.com/ajax/libs/popper.js/1.14.3/umd/popper.min.js",
    "https://stackpath.bootstrapcdn.com/bootstrap/4.1.3/js/bootstrap.min.js",
)
VENDOR_DIR_NAME = "vendor"
ASSET_DOWNLOAD_TIMEOUT = 30.0

# Keys accepted in settings.json
SETTINGS_KEYS = (
    "filename_pfx",
    "output_dir",
    "btn_label",
    "add_export_btn",
    "log_level",
)

# Logging constants
LOG_APP_NAME = "treezip"
LOG_FILE_NAME = "treezip"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20
LOG_MAX_CONTENT_CHARS = 200
