"""External data source integrations.

Each subdirectory is one data source::

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, the GET helper
    ├── params.py         # Request building
    ├── normalize.py      # Response -> tables
    └── lookup.py         # Caller-facing functions
"""
