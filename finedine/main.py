from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from finedine.routers import site, menu, reservations, admin_dashboard, manage_reservations
from finedine.config import settings
from finedine.utils.logging_config import setup_logging
from finedine.middleware.logging_middleware import log_requests
from finedine.utils.rate_limit import limiter


logger = setup_logging()
logger.info("Application starting...")
app = FastAPI(title=settings.app_name, debug=settings.debug)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.middleware("http")(log_requests)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(site.router)
app.include_router(menu.router)
app.include_router(reservations.router)
app.include_router(admin_dashboard.router)
app.include_router(manage_reservations.router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
