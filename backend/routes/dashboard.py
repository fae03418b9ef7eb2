"""
Dashboard overview page.

Shows the summary cards (invoice/customer counts, paid and pending totals)
and the latest invoices. All reads run concurrently before rendering.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, Response

from backend.auth.dependencies import get_current_principal
from backend.db.client import get_supabase_client
from backend.schemas.auth import Principal
from backend.services import assemble_dashboard_overview
from backend.utils.constants import DASHBOARD_PATH
from backend.utils.logging import get_logger
from backend.utils.templates import templates

logger = get_logger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get(
    DASHBOARD_PATH,
    response_class=HTMLResponse,
    summary="Dashboard overview",
)
async def dashboard_overview(
    request: Request,
    principal: Annotated[Optional[Principal], Depends(get_current_principal)],
) -> Response:
    supabase_client = get_supabase_client()

    try:
        overview = await assemble_dashboard_overview(supabase_client)
    except Exception as e:
        logger.error(f"Failed to load dashboard overview: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve dashboard data"
            }
        )

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"principal": principal, "overview": overview},
    )
