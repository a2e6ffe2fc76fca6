from datetime import date, datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, EmailStr, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EventTypeSchema(CamelModel):
    id: str
    name: str
    description: str
    duration_minutes: int = Field(alias="durationMinutes", gt=0)
    slug: str


class EventLookupResponseSchema(BaseModel):
    event: EventTypeSchema


class TimeSlotSchema(BaseModel):
    start: str
    available: bool


class SlotsResponseSchema(CamelModel):
    day: date = Field(alias="date")
    timezone: str
    slots: list[TimeSlotSchema]


class BookingCreateSchema(CamelModel):
    event_type_id: str = Field(alias="eventTypeId", min_length=1)
    guest_name: str = Field(alias="guestName")
    guest_email: EmailStr = Field(alias="guestEmail")
    guest_timezone: str = Field(alias="guestTimezone", default="UTC")
    scheduled_at: AwareDatetime = Field(alias="scheduledAt")
    end_time: AwareDatetime = Field(alias="endTime")
    description: str = ""


class BookingSchema(CamelModel):
    id: str
    event_type_id: str = Field(alias="eventTypeId")
    guest_name: str = Field(alias="guestName")
    guest_email: str = Field(alias="guestEmail")
    guest_timezone: str = Field(alias="guestTimezone")
    scheduled_at: datetime = Field(alias="scheduledAt")
    end_time: datetime = Field(alias="endTime")
    description: str
    google_meet_link: str = Field(alias="googleMeetLink")
    meeting_id: str | None = Field(alias="meetingId", default=None)
    status: str
    created_at: datetime | None = Field(alias="createdAt", default=None)


class BookingResponseSchema(BaseModel):
    booking: BookingSchema


class BookingListResponseSchema(BaseModel):
    bookings: list[BookingSchema]
