"""
Calendar record and timezone API schemas.

CalendarEvent mirrors the rows the scheduling screens read from the backend;
unknown columns are kept so records pass through the adapter intact.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CalendarEvent(BaseModel):
    """Calendar-style record with start/end instants."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    start: Optional[Union[datetime, str]] = None
    end: Optional[Union[datetime, str]] = None
    all_day: bool = False
    # Zone of wall-clock start/end values that carry no offset
    timezone: Optional[str] = None
    extended_props: Dict[str, Any] = Field(default_factory=dict)


class EventDisplay(BaseModel):
    """Display fields the event adapter adds to extended_props."""
    timezone: str
    display_start: str
    display_end: str
    display_day: str
    display_date: str


class ZoneOption(BaseModel):
    value: str
    label: str


class ZoneResolution(BaseModel):
    candidate: Optional[str] = None
    zone: str
    label: str
    offset: str


class ConvertRequest(BaseModel):
    instant: Union[datetime, str]
    source_zone: Optional[str] = "UTC"
    target_zone: Optional[str] = "UTC"


class ConvertResponse(BaseModel):
    instant: str
    utc: str
    zone: str
    offset: str


class FormatRequest(BaseModel):
    instant: Union[datetime, str]
    token: str = "datetime-short"
    zone: Optional[str] = "UTC"
    reference: Optional[Union[datetime, str]] = None


class FormatResponse(BaseModel):
    text: str
    token: str
    zone: str


class ProjectRequest(BaseModel):
    events: List[Dict[str, Any]] = Field(default_factory=list)
    target_zone: Optional[str] = None


class ProjectResponse(BaseModel):
    events: List[Dict[str, Any]]
    target_zone: str
