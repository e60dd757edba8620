APP_NAME = "Sales Tracker"

DATA_DIR = "data"
DB_FILE_NAME = "sales_tracker.db"
JSON_STORE_FILE_NAME = "sales_tracker.json"

TABLE_SCHEMA_VERSION = "schema_version"
SCHEMA_VERSION = "1.0.0"

# Supported persistence backends (see config.AppConfig.backend)
BACKEND_SQLITE = "sqlite"
BACKEND_JSON = "json"
BACKENDS = (BACKEND_SQLITE, BACKEND_JSON)

# Business tunables
REPURCHASE_THRESHOLD_DAYS = 28
LOW_STOCK_THRESHOLD = 5
DEFAULT_COMMISSION_RATE = 10.0

DATE_FMT = "%Y-%m-%d"
QT_DATE_FMT = "yyyy-MM-dd"
