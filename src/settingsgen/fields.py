"""Field definitions: one pydantic model per field type.

``FieldDefinition`` is a tagged union on ``type``. Built-in types map to
their own model carrying the type-specific payload; any other type name is
an extension type and lands in ``CustomField``, which keeps the extra keys
for the extension's sanitize and render handlers.
"""

from __future__ import annotations

from typing import Annotated, Any, Callable, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)

from .consts import DATE_PLACEHOLDER
from .enums import BUILTIN_FIELD_TYPES

Sanitizer = Callable[[Any, Any], Any]
AttributeValue = Union[bool, int, float, str]


class BaseField(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    title: str
    type: str
    description: str = ""
    placeholder: str = ""
    default: Any = ""
    options: dict[str, str] = Field(default_factory=dict)
    tab: str = ""
    css_class: str = Field(default="", alias="class")
    attributes: dict[str, AttributeValue] = Field(default_factory=dict)
    sanitizer: Optional[Sanitizer] = Field(default=None, exclude=True)

    @field_validator("options", mode="before")
    @classmethod
    def coerce_options(cls, v):
        if v is None:
            return {}
        if isinstance(v, (list, tuple)):
            return {str(item): str(item) for item in v}
        if isinstance(v, dict):
            return {str(key): str(label) for key, label in v.items()}
        return v


class TextField(BaseField):
    type: Literal["text"] = "text"


class TextareaField(BaseField):
    type: Literal["textarea"] = "textarea"
    rows: int = Field(default=5, ge=1)
    cols: int = Field(default=50, ge=1)


class WysiwygField(BaseField):
    type: Literal["wysiwyg"] = "wysiwyg"
    rows: int = Field(default=10, ge=1)
    media_buttons: bool = True
    teeny: bool = False


class CheckboxField(BaseField):
    type: Literal["checkbox"] = "checkbox"
    default: bool = False
    checkbox_label: str = ""


class ToggleField(BaseField):
    type: Literal["toggle"] = "toggle"
    default: bool = False
    on_text: str = ""
    off_text: str = ""


class RadioField(BaseField):
    type: Literal["radio"] = "radio"
    default: str = ""


class SelectField(BaseField):
    type: Literal["select"] = "select"
    default: str = ""


class MultiselectField(BaseField):
    type: Literal["multiselect"] = "multiselect"
    default: list[str] = Field(default_factory=list)
    size: int = Field(default=5, ge=1)

    @field_validator("default", mode="before")
    @classmethod
    def coerce_default_list(cls, v):
        if v is None or v == "":
            return []
        if isinstance(v, (list, tuple)):
            return [str(item) for item in v]
        return [str(v)]


class MediaField(BaseField):
    type: Literal["media"] = "media"
    default: int = Field(default=0, ge=0)
    upload_button_text: str = ""
    remove_button_text: str = ""

    @field_validator("default", mode="before")
    @classmethod
    def empty_default_is_zero(cls, v):
        return 0 if v in (None, "") else v


class EmailField(BaseField):
    type: Literal["email"] = "email"
    default: str = ""


class UrlField(BaseField):
    type: Literal["url"] = "url"
    default: str = ""


class PasswordField(BaseField):
    type: Literal["password"] = "password"
    default: str = ""


class NumberField(BaseField):
    type: Literal["number"] = "number"
    default: Optional[Union[int, float]] = None
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    step: Union[int, float, str] = "1"

    @field_validator("default", mode="before")
    @classmethod
    def empty_default_is_none(cls, v):
        return None if v == "" else v


class TelField(BaseField):
    type: Literal["tel"] = "tel"
    default: str = ""
    pattern: str = ""


class DateField(BaseField):
    type: Literal["date"] = "date"
    default: str = ""
    placeholder: str = DATE_PLACEHOLDER


class ColorField(BaseField):
    type: Literal["color"] = "color"
    default: str = ""


class CustomField(BaseField):
    """A field whose type is handled by registered extension hooks."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


def _field_tag(value: Any) -> str:
    if isinstance(value, dict):
        field_type = value.get("type")
    else:
        field_type = getattr(value, "type", None)
    field_type = getattr(field_type, "value", field_type)
    return field_type if field_type in BUILTIN_FIELD_TYPES else "custom"


FieldDefinition = Annotated[
    Union[
        Annotated[TextField, Tag("text")],
        Annotated[TextareaField, Tag("textarea")],
        Annotated[WysiwygField, Tag("wysiwyg")],
        Annotated[CheckboxField, Tag("checkbox")],
        Annotated[ToggleField, Tag("toggle")],
        Annotated[RadioField, Tag("radio")],
        Annotated[SelectField, Tag("select")],
        Annotated[MultiselectField, Tag("multiselect")],
        Annotated[MediaField, Tag("media")],
        Annotated[EmailField, Tag("email")],
        Annotated[UrlField, Tag("url")],
        Annotated[PasswordField, Tag("password")],
        Annotated[NumberField, Tag("number")],
        Annotated[TelField, Tag("tel")],
        Annotated[DateField, Tag("date")],
        Annotated[ColorField, Tag("color")],
        Annotated[CustomField, Tag("custom")],
    ],
    Discriminator(_field_tag),
]

_field_adapter: TypeAdapter[FieldDefinition] = TypeAdapter(FieldDefinition)


def parse_field(data: dict[str, Any]) -> BaseField:
    """Validate a raw mapping into the field model for its type."""
    data = dict(data)
    if "type" in data:
        data["type"] = getattr(data["type"], "value", data["type"])
    return _field_adapter.validate_python(data)
