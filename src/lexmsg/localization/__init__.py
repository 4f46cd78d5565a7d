"""Localization package: resource loading, configuration and orchestration.

Submodules:
    types   - PEP 695 type aliases (LangId, MessageId, TemplateSource)
    loading - .lang parser, ResourceProvider protocol, PackageResourceProvider,
              PathResourceProvider, ResourceLoadResult, LoadSummary
    config  - ResourceConfig, ManagerConfig
    chain   - FormatterChain (several formatters, tried per language)
    manager - LocalizationManager (store + formatter wired from config)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from lexmsg.enums import LoadStatus
from lexmsg.localization.chain import FormatterChain
from lexmsg.localization.config import ManagerConfig, ResourceConfig
from lexmsg.localization.loading import (
    LoadSummary,
    PackageResourceProvider,
    PathResourceProvider,
    ResourceLoadResult,
    ResourceProvider,
    parse_lang_source,
)
from lexmsg.localization.manager import LocalizationManager
from lexmsg.localization.types import LangId, MessageId, TemplateSource

__all__ = [
    # Orchestration
    "FormatterChain",
    "LocalizationManager",
    # Configuration
    "ManagerConfig",
    "ResourceConfig",
    # Provider protocol and implementations
    "ResourceProvider",
    "PackageResourceProvider",
    "PathResourceProvider",
    "parse_lang_source",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "ResourceLoadResult",
    # Type aliases for user code type annotations
    "LangId",
    "MessageId",
    "TemplateSource",
]
