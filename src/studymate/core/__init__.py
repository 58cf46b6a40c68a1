"""Features built on top of the record store.

- export: sectioned CSV export of every table
- stats: profile page summary
- sql_console: the demo page's command interpreter
"""

__all__ = [
    "export",
    "stats",
    "sql_console",
]
