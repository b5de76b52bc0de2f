"""Shared constants and configuration."""

# Output naming
DEFAULT_SEPARATOR = "_"
DEFAULT_SUFFIX = "pdf"
DEFAULT_PREFIX = "ExamTimetable"

# Sorts ahead of normal output in a directory listing
FAILED_PAGE_PREFIX = "AAA_FAILED_TO_READ_"
