import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from studiodesk.api.v1.audit import router as audit_router
from studiodesk.api.v1.bookings import router as bookings_router
from studiodesk.api.v1.members import router as members_router
from studiodesk.api.v1.reports import router as reports_router
from studiodesk.api.v1.transactions import router as transactions_router
from studiodesk.application.exceptions import StorageError
from studiodesk.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "class_id", "person_id", "seller_id", "reason", "error"):
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

logger = logging.getLogger(__name__)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking Core", version="1.0.0")

app.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])
app.include_router(reports_router, prefix="/api/v1", tags=["reports"])
app.include_router(transactions_router, prefix="/api/v1", tags=["transactions"])
app.include_router(members_router, prefix="/api/v1", tags=["members"])
app.include_router(audit_router, prefix="/api/v1", tags=["audit"])


@app.exception_handler(StorageError)
def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Store unavailable", extra={"error": str(exc)})
    return JSONResponse(status_code=503, content={"detail": "Store unavailable"})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
