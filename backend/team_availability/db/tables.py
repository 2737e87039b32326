"""
Single source of truth for database tables that exist after migrations (001).

Use these names when writing raw SQL. Order follows the FK: people before marks.
"""
ALL_TABLE_NAMES = (
    "people",
    "availability",
)
