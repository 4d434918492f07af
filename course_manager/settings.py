"""Package settings and defaults."""

### Constants and Configurations
# === Global defaults (overridden by config file and CLI flags at runtime) ===

# Backing file name, resolved against the current working directory.
DEFAULT_DB_FILENAME = "courses.json"

# Indentation used when writing the backing file.
JSON_INDENT = 2

DRY_RUN = False

LOG_DIR = ""
LOG_LEVEL = "INFO"
LOG_MAX_BYTES = 5_000_000
LOG_BACKUP_COUNT = 3

DB_BACKUP_KEEP = 5

# Seconds to wait for a prompt answer before giving up.
INPUT_TIMEOUT = 60

# Column order for course tables.
COURSE_FIELDS = ["id", "title", "price"]
