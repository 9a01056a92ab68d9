"""
fehlerteufel - localized error descriptions

Error types built on LocalizedError get a name, code and severity, plus a
description, failure reason and recovery suggestion that are looked up in
string tables. Texts are Clauses: their parameters are substituted by name,
so a translation may reorder them freely.
"""

from .errors import (
    FehlerteufelError,
    ClauseError,
    MissingParameterError,
    CatalogError,
    UnresolvableCauseError,
)
from .config import FehlerteufelConfig, get_default_config, set_default_config
from .runtime import (
    Clause,
    Catalog,
    Severity,
    ErrorRecord,
    LocalizedError,
    make_error,
    get_default_catalog,
    set_default_catalog,
)

__all__ = [
    "FehlerteufelError",
    "ClauseError",
    "MissingParameterError",
    "CatalogError",
    "UnresolvableCauseError",
    "FehlerteufelConfig",
    "get_default_config",
    "set_default_config",
    "Clause",
    "Catalog",
    "Severity",
    "ErrorRecord",
    "LocalizedError",
    "make_error",
    "get_default_catalog",
    "set_default_catalog",
]
