"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ALL_FILTER = "all"

PERFORMER_LIST_SIZE = 3
RECENT_ATTENDANCE_DAYS = 7
RECENT_SHOWS_LIMIT = 5
MIN_POLL_OPTIONS = 2

EXPORT_ROW_LIMIT = 100
PDF_ROWS_PER_PAGE = 10

IMAGE_WIDTH = 1200
IMAGE_HEIGHT = 1600
IMAGE_BAR_MAX_WIDTH = 800

DEFAULT_SESSION_DAYS = 30
