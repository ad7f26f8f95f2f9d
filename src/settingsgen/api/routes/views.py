"""HTML settings pages: render the active tab and accept form posts."""

import logging
import re
from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...consts import TEMPLATE_DOCUMENT
from ...engine import RequestContext
from ...i18n import current_language
from ...registry import PageRegistry
from .deps import authorized_engine, get_registry, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pages", tags=["views"])


def extract_form_values(form, page_id: str) -> dict[str, Any]:
    """Collect ``page_id[field]`` and ``page_id[field][]`` form entries.

    List entries win over the plain entry of the same field; for plain
    entries the last submitted value wins (checkbox hidden inputs come first).
    """
    pattern = re.compile(rf"^{re.escape(page_id)}\[([^\]]+)\](\[\])?$")
    values: dict[str, Any] = {}
    list_fields: set[str] = set()

    for key in dict.fromkeys(form.keys()):
        match = pattern.match(key)
        if not match:
            continue

        field_id, is_list = match.group(1), bool(match.group(2))
        if is_list:
            values[field_id] = list(form.getlist(key))
            list_fields.add(field_id)
        elif field_id not in list_fields:
            values[field_id] = form.getlist(key)[-1]

    return values


def _page_url(page_id: str, **params) -> str:
    query = urlencode({k: v for k, v in params.items() if v})
    return f"/pages/{page_id}" + (f"?{query}" if query else "")


@router.get("/{page_id}", response_class=HTMLResponse)
def show_page(
    page_id: str,
    updated: bool = False,
    registry: PageRegistry = Depends(get_registry),
    context: RequestContext = Depends(get_request_context),
):
    engine = authorized_engine(registry, page_id, context)
    active_tab = engine.schema.resolve_tab(context.tab)
    content = engine.render_page(
        context,
        form_action=_page_url(page_id, tab=active_tab if engine.schema.has_tabs else None),
        updated=updated,
    )

    document = engine.renderer.jinja_env.get_template(TEMPLATE_DOCUMENT)
    return HTMLResponse(
        document.render(
            title=engine.schema.page.title,
            language=current_language(),
            menu=registry.menu(),
            current_page=page_id,
            content=content,
        )
    )


@router.post("/{page_id}")
async def submit_page(
    page_id: str,
    request: Request,
    registry: PageRegistry = Depends(get_registry),
    context: RequestContext = Depends(get_request_context),
):
    engine = authorized_engine(registry, page_id, context)
    form = await request.form()
    values = extract_form_values(form, page_id)
    engine.save(values)

    active_tab = engine.schema.resolve_tab(context.tab) if engine.schema.has_tabs else None
    return RedirectResponse(
        url=_page_url(page_id, tab=active_tab, updated="true"),
        status_code=303,
    )
