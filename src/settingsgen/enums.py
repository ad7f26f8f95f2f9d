"""Enumeration type definitions"""

from enum import Enum


class FieldType(str, Enum):
    """Built-in field types"""

    TEXT = "text"
    TEXTAREA = "textarea"
    WYSIWYG = "wysiwyg"
    CHECKBOX = "checkbox"
    TOGGLE = "toggle"
    RADIO = "radio"
    SELECT = "select"
    MULTISELECT = "multiselect"
    MEDIA = "media"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    NUMBER = "number"
    TEL = "tel"
    DATE = "date"
    COLOR = "color"


class LocationType(str, Enum):
    MENU = "menu"
    SUBMENU = "submenu"


class StoreType(str, Enum):
    MEMORY = "memory"
    FILE = "file"
    DB = "db"


BUILTIN_FIELD_TYPES = frozenset(t.value for t in FieldType)
