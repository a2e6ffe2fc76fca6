import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from slotbook.api.v1.bookings import router as bookings_router
from slotbook.api.v1.embed import router as embed_router
from slotbook.application.exceptions import BookingSubmissionError, EventLookupError
from slotbook.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("slug", "meeting_id", "status", "fallback", "guest_email", "state", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.APP_NAME} Booking API", version="1.0.0")

app.include_router(embed_router, prefix="/api", tags=["embed"])
app.include_router(bookings_router, prefix="/api", tags=["bookings"])


@app.exception_handler(EventLookupError)
async def event_lookup_error_handler(request: Request, exc: EventLookupError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc) or "Event not found"})


@app.exception_handler(BookingSubmissionError)
async def booking_error_handler(request: Request, exc: BookingSubmissionError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code or 500, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid {field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(status_code=422, content={"error": message})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
