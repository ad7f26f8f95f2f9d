from fastapi import HTTPException, Request

from ...engine import RequestContext, SettingsEngine
from ...errors import PageNotFound, PermissionDenied
from ...registry import PageRegistry


def get_registry(request: Request) -> PageRegistry:
    return request.app.state.registry


def get_request_context(request: Request, tab: str | None = None) -> RequestContext:
    capabilities = request.app.state.config.web.capabilities
    return RequestContext(tab=tab, capabilities=frozenset(capabilities))


def authorized_engine(registry: PageRegistry, page_id: str, context: RequestContext) -> SettingsEngine:
    try:
        return registry.authorize(page_id, context)
    except PageNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDenied as e:
        raise HTTPException(status_code=403, detail=str(e))
