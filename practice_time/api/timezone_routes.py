"""
Timezone API Routes
Exposes zone validation, conversion, formatting and calendar projection to
the scheduling UI.

Endpoints:
- Zone dropdown options and alias resolution
- Per-user zone lookup from profiles
- Instant conversion and formatting
- Batch calendar event projection
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client

from ..database import Schema, get_supabase_client
from ..schemas.calendar import (
    ConvertRequest,
    ConvertResponse,
    FormatRequest,
    FormatResponse,
    ProjectRequest,
    ProjectResponse,
    ZoneOption,
    ZoneResolution,
)
from ..services.profile_timezone_service import get_user_timezone
from ..timezone import (
    TimeZoneError,
    common_timezones,
    convert,
    display_label,
    ensure_zone,
    format_instant,
    offset_label,
    project_events,
    resolve_format,
    to_utc_iso,
)
from ..config import get_timezone_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timezones", tags=["timezones"])


def get_profiles_client() -> Client:
    """
    Supabase client for profile reads.

    Raises 503 when the backend credentials are not configured.
    """
    try:
        return get_supabase_client(Schema.PUBLIC)
    except ValueError as e:
        logger.error(f"Supabase client unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "backend_unavailable", "message": str(e)}
        )


def _bad_request(e: TimeZoneError) -> HTTPException:
    logger.info(f"Rejected timezone request: {e}")
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": e.code.lower(), "message": str(e), "details": e.details}
    )


def _resolution(candidate, zone: str) -> ZoneResolution:
    return ZoneResolution(
        candidate=candidate,
        zone=zone,
        label=display_label(zone),
        offset=offset_label(zone),
    )


# ============================================================================
# Zone Endpoints
# ============================================================================

@router.get("/options", response_model=List[ZoneOption])
async def list_timezone_options():
    """Dropdown options with labels carrying the current offset."""
    return common_timezones()


@router.get("/resolve", response_model=ZoneResolution)
async def resolve_timezone(candidate: str = Query("", description="IANA id, label or abbreviation")):
    """
    Resolve any zone string to a valid IANA id.

    Never fails: unknown input resolves to the configured fallback.
    """
    zone = ensure_zone(candidate)
    return _resolution(candidate, zone)


@router.get("/users/{user_id}", response_model=ZoneResolution)
def user_timezone(user_id: str, client: Client = Depends(get_profiles_client)):
    """Zone stored on a user's profile, or the configured default."""
    return _resolution(None, get_user_timezone(user_id, client))


# ============================================================================
# Conversion & Formatting Endpoints
# ============================================================================

@router.post("/convert", response_model=ConvertResponse)
async def convert_instant(request: ConvertRequest):
    """
    Convert an instant between zones.

    ## Errors
    - **400 Bad Request**: Unparsable instant
    """
    try:
        converted = convert(request.instant, request.source_zone, request.target_zone)
    except TimeZoneError as e:
        raise _bad_request(e)

    zone = ensure_zone(request.target_zone)
    return ConvertResponse(
        instant=converted.isoformat(),
        utc=to_utc_iso(converted),
        zone=zone,
        offset=offset_label(zone, converted),
    )


@router.post("/format", response_model=FormatResponse)
async def format_timestamp(request: FormatRequest):
    """
    Render an instant with one of the fixed display templates.

    ## Errors
    - **400 Bad Request**: Unparsable instant or unknown token
    """
    try:
        token = resolve_format(request.token)
        text = format_instant(request.instant, token, request.zone, reference=request.reference)
    except TimeZoneError as e:
        raise _bad_request(e)

    return FormatResponse(text=text, token=token.value, zone=ensure_zone(request.zone))


# ============================================================================
# Calendar Projection Endpoints
# ============================================================================

@router.post("/project", response_model=ProjectResponse)
async def project_calendar_events(request: ProjectRequest):
    """
    Project calendar records into the viewer's zone.

    Records that cannot be projected are returned unchanged.
    """
    settings = get_timezone_settings()
    zone = ensure_zone(request.target_zone, fallback=settings.default_timezone)
    return ProjectResponse(events=project_events(request.events, zone), target_zone=zone)
