from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CalendarEventResponse(BaseModel):
    id: int
    date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_block: bool = False
    status: Optional[str] = None
    program_name: Optional[str] = None
    student_name: Optional[str] = None
    student_birthday: Optional[date] = None
    branch_name: Optional[str] = None
    sport_name: Optional[str] = None
    package_name: Optional[str] = None
    coach_name: Optional[str] = None
    package_id: Optional[int] = None
    coach_id: Optional[int] = None
    color: Optional[str] = None
    gender: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class GroupedEventResponse(BaseModel):
    key: str
    time: str
    coach_name: str
    package_id: int
    package_name: str
    program_name: str
    is_block: bool
    color: str
    count: int
    events: List[CalendarEventResponse]

    model_config = ConfigDict(from_attributes=True)


class CalendarDayResponse(BaseModel):
    date: date
    groups: List[GroupedEventResponse]
