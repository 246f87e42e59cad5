"""gbif-names - look up scientific names across GBIF checklists.

Architecture::

    datasources/gbif/   Species search: request params, GET, response tables
    services/           Shared utilities (HTTP session factory)
    schemas.py          Request validation models and the output selector
    config.py           Settings (base URL, timeout, logging)
    cli.py              ``gbif-names`` command

Data flow: criteria -> params -> GET /species/search -> normalize -> selected view
"""

__version__ = "0.1.0"
__author__ = "Michael Howden"

from gbif_names.config import Settings
from gbif_names.datasources.gbif import NameLookupResult, name_lookup
from gbif_names.errors import GbifNamesError, InvalidArgumentError, TransportError

__all__ = [
    "GbifNamesError",
    "InvalidArgumentError",
    "NameLookupResult",
    "Settings",
    "TransportError",
    "__version__",
    "name_lookup",
]
