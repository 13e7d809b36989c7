"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7

GENERATED_PASSWORD_LENGTH = 6
GENERATED_PASSWORD_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
MIN_PASSWORD_LENGTH = 4

DAILY_CODE_MIN = 1000
DAILY_CODE_MAX = 9999

EXPORT_HEADER = ("ID", "Name", "Date", "Time", "Position", "Description", "Location")
EXPORT_FILENAME_PREFIX = "Attendance_"
