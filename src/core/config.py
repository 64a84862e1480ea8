"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("TIME_REPORT_DB_PATH", PROJECT_ROOT / "data" / "db" / "time-report.db"))
WORKBOOK_PATH = Path(
    os.environ.get("TIME_REPORT_WORKBOOK_PATH", PROJECT_ROOT / "data" / "time-report.xlsx")
)

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

# "sqlite" keeps categories and report rows in DB_PATH,
# "excel" keeps them in the Projects / Time sheets of WORKBOOK_PATH
REPORT_BACKEND = os.environ.get("REPORT_BACKEND", "sqlite").lower()

TIME_ZONE = os.environ.get("TIME_ZONE", "America/New_York")

PROJECTS_SHEET = "Projects"
TIME_SHEET = "Time"
REPORT_HEADERS = ["Week Start", "Week End", "Category", "Hours", "Tasks"]

OTHER_CATEGORY = "Other"
TASK_SEPARATOR = "\n"

# =============================================================================
# EMAIL CONFIGURATION
# =============================================================================

FROM_EMAIL = os.environ.get("FROM_EMAIL", "")
TO_EMAIL = os.environ.get("TO_EMAIL", "")
ERROR_EMAIL = os.environ.get("ERROR_EMAIL", "")

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

# Mailbox whose default calendar is reported on
CALENDAR_USER = os.environ.get("CALENDAR_USER", "")
CALENDAR_PAGE_SIZE = 100

# =============================================================================
# MS GRAPH CREDENTIALS (from environment)
# =============================================================================

GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")

# =============================================================================
# API CONFIGURATION
# =============================================================================

REPORT_API_KEY = os.environ.get("REPORT_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
