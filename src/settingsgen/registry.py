"""Page registry: menu placement and capability checks for settings pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

from .engine import RequestContext, SettingsEngine
from .enums import LocationType
from .errors import PageNotFound, PermissionDenied, SchemaException
from .hooks import HookRegistry
from .media import MediaResolver
from .render import FieldRenderer
from .schema import SchemaBuilder
from .stores.base import SettingsStore

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuEntry:
    page_id: str
    title: str
    menu_title: str
    type: LocationType
    parent: str
    position: Optional[int]
    icon: str


class PageRegistry:
    def __init__(self) -> None:
        self._engines: dict[str, SettingsEngine] = {}

    def register(self, engine: SettingsEngine) -> SettingsEngine:
        if engine.page_id in self._engines:
            raise SchemaException(f"Page '{engine.page_id}' is already registered")

        self._engines[engine.page_id] = engine
        logger.info(f"Registered settings page '{engine.page_id}'")
        return engine

    def get(self, page_id: str) -> SettingsEngine:
        try:
            return self._engines[page_id]
        except KeyError:
            raise PageNotFound(f"Unknown settings page: {page_id}") from None

    def authorize(self, page_id: str, context: RequestContext) -> SettingsEngine:
        """Return the page's engine if the request holds the page's capability."""
        engine = self.get(page_id)
        capability = engine.schema.page.capability
        if not context.can(capability):
            logger.warning(f"Access to page '{page_id}' denied: missing capability '{capability}'")
            raise PermissionDenied(f"Capability '{capability}' is required to manage '{page_id}'")
        return engine

    def menu(self) -> list[MenuEntry]:
        """Menu entries: top-level pages first, then submenu pages, each by position."""
        entries = []
        for index, engine in enumerate(self._engines.values()):
            page = engine.schema.page
            location = page.location
            entries.append(
                (
                    location.type != LocationType.MENU,
                    location.position is None,
                    location.position or 0,
                    index,
                    MenuEntry(
                        page_id=page.id,
                        title=page.title,
                        menu_title=page.menu_title,
                        type=location.type,
                        parent=location.parent,
                        position=location.position,
                        icon=location.icon,
                    ),
                )
            )
        return [entry[-1] for entry in sorted(entries, key=lambda item: item[:4])]

    def __contains__(self, page_id: str) -> bool:
        return page_id in self._engines

    def __iter__(self) -> Iterator[SettingsEngine]:
        return iter(self._engines.values())

    def __len__(self) -> int:
        return len(self._engines)

    @classmethod
    def from_config(
        cls,
        config: "Config",
        store: SettingsStore,
        *,
        hooks: HookRegistry | None = None,
        media_resolver: MediaResolver | None = None,
    ) -> "PageRegistry":
        hooks = hooks or HookRegistry()
        renderer = FieldRenderer(
            hooks=hooks,
            media_resolver=media_resolver or config.media.create_resolver(),
        )

        registry = cls()
        for page_config in config.pages:
            schema = SchemaBuilder.from_config(page_config)
            registry.register(SettingsEngine(schema, store, hooks=hooks, renderer=renderer))
        return registry
