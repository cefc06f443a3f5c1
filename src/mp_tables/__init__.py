"""
mp_tables – list-state controller for paged collections.

Import path convention::

    from mp_tables.application.table import TableController, TableOptions
    from mp_tables.application.pagination import Filter, Sort, PaginationMode
    from mp_tables.config import TableSettings, EnvSettingsLoader
    from mp_tables.adapters.http import RestListFetcher
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
