"""Configuration objects for resource discovery and manager wiring.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from lexmsg.constants import BUNDLED_PATH_TEMPLATE, OVERRIDE_PATH_TEMPLATE

if TYPE_CHECKING:
    from lexmsg.runtime.lang import Lang

__all__ = ["ManagerConfig", "ResourceConfig"]


@dataclass(frozen=True, slots=True)
class ResourceConfig:
    """Where the .lang resources of one application live.

    Two locations are consulted, in priority order:

    1. Bundled: ``assets/<domain as path>/<app_id>/langs/<lang>.lang`` inside
       ``package`` (skipped when ``package`` is None)
    2. Override: ``<data_folder>/langs/<lang>.lang`` on the filesystem

    Keys from the override win over bundled keys.

    Example:
        >>> config = ResourceConfig("org.example", "myapp", "/var/lib/myapp", package="myapp")
        >>> config.bundled_path_template
        'assets/org/example/myapp/langs/{lang}.lang'

    Attributes:
        domain: Dotted application domain (e.g., 'org.example')
        app_id: Application id (e.g., 'myapp')
        data_folder: Directory holding user-editable overrides
        package: Package containing the bundled assets, or None
    """

    domain: str
    app_id: str
    data_folder: str | Path
    package: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration.

        Raises:
            ValueError: If domain or app_id is empty, or domain has empty segments
        """
        if not self.domain or any(not part for part in self.domain.split(".")):
            msg = f"domain must be a non-empty dotted name, got: '{self.domain}'"
            raise ValueError(msg)
        if not self.app_id:
            msg = "app_id cannot be empty"
            raise ValueError(msg)
        if self.package is not None and not self.package:
            msg = "package cannot be empty; use None to disable bundled resources"
            raise ValueError(msg)

    @property
    def bundled_path_template(self) -> str:
        """Package-relative bundled resource path with a {lang} placeholder."""
        return BUNDLED_PATH_TEMPLATE.format(
            domain_path=self.domain.replace(".", "/"),
            app_id=self.app_id,
            lang="{lang}",
        )

    @property
    def override_path_template(self) -> str:
        """Filesystem override path with a {lang} placeholder."""
        return str(Path(self.data_folder) / OVERRIDE_PATH_TEMPLATE)


@dataclass(frozen=True, slots=True)
class ManagerConfig:
    """ResourceConfig plus the languages a LocalizationManager loads up front.

    Attributes:
        resources: Resource locations
        langs: Languages to load at creation, in order (non-empty)
        fallback_lang: Language substituted for FALLBACK, or None
    """

    resources: ResourceConfig
    langs: tuple[Lang, ...]
    fallback_lang: Lang | None = None

    def __post_init__(self) -> None:
        """Normalize langs to a tuple and validate.

        Raises:
            ValueError: If langs is empty or contains the FALLBACK sentinel
        """
        langs = tuple(self.langs)
        object.__setattr__(self, "langs", langs)
        if not langs:
            msg = "langs must contain at least one language"
            raise ValueError(msg)
        if any(lang.is_fallback for lang in langs):
            msg = "langs cannot contain the FALLBACK sentinel"
            raise ValueError(msg)
        if self.fallback_lang is not None and self.fallback_lang.is_fallback:
            msg = "fallback_lang cannot be the FALLBACK sentinel"
            raise ValueError(msg)
