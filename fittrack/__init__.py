"""90-day fitness tracker: program day, exercise rotation and progress records."""

TOTAL_DAYS = 90
DAYS_PER_WEEK = 7
DAY_TYPES = ("office", "nonoffice")
