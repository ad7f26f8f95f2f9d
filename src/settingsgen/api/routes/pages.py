import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...engine import RequestContext
from ...errors import StoreException
from ...registry import PageRegistry
from .deps import authorized_engine, get_registry, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pages", tags=["pages"])


class MenuEntryResponse(BaseModel):
    page_id: str
    title: str
    menu_title: str
    type: str
    parent: str
    position: int | None = None
    icon: str


class PagesResponse(BaseModel):
    success: bool = True
    pages: list[MenuEntryResponse]


class SettingsResponse(BaseModel):
    success: bool = True
    page_id: str
    exists: bool
    data: dict[str, Any]


class SettingsSubmitRequest(BaseModel):
    values: dict[str, Any]


class SettingsSaveResponse(BaseModel):
    success: bool
    message: str | None = None
    data: dict[str, Any] | None = None
    error: str | None = None


class ValidateResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]


@router.get("", response_model=PagesResponse)
def list_pages(registry: PageRegistry = Depends(get_registry)):
    return PagesResponse(
        pages=[
            MenuEntryResponse(
                page_id=entry.page_id,
                title=entry.title,
                menu_title=entry.menu_title,
                type=entry.type.value,
                parent=entry.parent,
                position=entry.position,
                icon=entry.icon,
            )
            for entry in registry.menu()
        ]
    )


@router.get("/{page_id}/schema")
def get_page_schema(
    page_id: str,
    registry: PageRegistry = Depends(get_registry),
    context: RequestContext = Depends(get_request_context),
):
    engine = authorized_engine(registry, page_id, context)
    schema = engine.schema
    return {
        "page": schema.page.model_dump(mode="json"),
        "default_tab": schema.default_tab,
        "tabs": [tab.model_dump(mode="json") for tab in schema.tabs],
        "fields": [field.model_dump(mode="json") for field in schema.fields],
    }


@router.get("/{page_id}/settings", response_model=SettingsResponse)
def get_settings(
    page_id: str,
    registry: PageRegistry = Depends(get_registry),
    context: RequestContext = Depends(get_request_context),
):
    engine = authorized_engine(registry, page_id, context)
    record = engine.get_record()
    return SettingsResponse(page_id=page_id, exists=record is not None, data=record or {})


@router.post("/{page_id}/settings", response_model=SettingsSaveResponse)
def save_settings(
    page_id: str,
    request: SettingsSubmitRequest,
    registry: PageRegistry = Depends(get_registry),
    context: RequestContext = Depends(get_request_context),
):
    engine = authorized_engine(registry, page_id, context)
    try:
        record = engine.save(request.values)
    except StoreException as e:
        logger.error(f"Failed to save settings for page '{page_id}': {e}")
        return JSONResponse(
            status_code=500,
            content=SettingsSaveResponse(success=False, error=str(e)).model_dump(),
        )

    return SettingsSaveResponse(success=True, message="Settings saved successfully", data=record)


@router.post("/{page_id}/validate", response_model=ValidateResponse)
def validate_settings(
    page_id: str,
    request: SettingsSubmitRequest,
    registry: PageRegistry = Depends(get_registry),
    context: RequestContext = Depends(get_request_context),
):
    engine = authorized_engine(registry, page_id, context)
    record_exists = engine.get_record() is not None
    return ValidateResponse(data=engine.validate(request.values, record_exists=record_exists))
