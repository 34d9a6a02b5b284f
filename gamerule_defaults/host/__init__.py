"""
Host Collaborators
==================
Contracts the host runtime satisfies (rule enumeration, localization) and the
file-backed adapters used outside of it.
"""

from gamerule_defaults.host.localization import CallbackLocalizer, LanguageTable, Localizer
from gamerule_defaults.host.rules import (
    RuleCatalog,
    RuleCatalogError,
    RuleEnumerator,
    RuleSpec,
)

__all__ = [
    "CallbackLocalizer",
    "LanguageTable",
    "Localizer",
    "RuleCatalog",
    "RuleCatalogError",
    "RuleEnumerator",
    "RuleSpec",
]
