"""Translation of the built-in UI strings using gettext.

Only the texts the renderer supplies on its own (toggle On/Off labels, media
button texts) go through here. Titles, descriptions and option labels come
from the schema and are rendered as given.
"""

import gettext as gettext_module
import logging
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

DOMAIN = "settingsgen"
LOCALE_DIR = Path(__file__).parent / "locales"

_ui_language = "en"


def initialize(ui_language: str = "en") -> None:
    """Select the language used for built-in UI strings.

    Args:
        ui_language: Language code (e.g., "en", "de", "zh_CN")
    """
    global _ui_language

    _ui_language = ui_language
    logger.info(f"Translation initialized: UI={ui_language}")


def current_language() -> str:
    return _ui_language


@lru_cache(maxsize=None)
def _load_translation(language: str) -> gettext_module.NullTranslations:
    if not language or language == "en":
        return gettext_module.NullTranslations()

    translation = gettext_module.translation(
        domain=DOMAIN,
        localedir=str(LOCALE_DIR),
        languages=[language],
        fallback=True,
    )
    if isinstance(translation, gettext_module.GNUTranslations):
        logger.debug(f"Loaded translation catalog for language: {language}")
    else:
        logger.debug(f"No translation catalog for {language}, using msgids")
    return translation


def gettext(message: str) -> str:
    """Translate a built-in UI string into the configured language."""
    return _load_translation(_ui_language).gettext(message)
