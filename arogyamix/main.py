import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from arogyamix.config import settings
from arogyamix.database import Base, engine
from arogyamix.routers import appointments, auth, partners, store
from arogyamix.routers import profile as profile_router
from arogyamix.services.validation import first_error_message
from arogyamix.utils.response import create_response, handle_exception

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION)
# Signed cookie that carries the shopper's cart id
app.add_middleware(SessionMiddleware, secret_key=settings.SESSION_SECRET)

# Auto create tables
Base.metadata.create_all(bind=engine)

# CORS for SPA / API access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    response = create_response(message=detail, data=None, status_code=exc.status_code)
    for key, value in (exc.headers or {}).items():
        response.headers[key] = value
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return create_response(
        message=first_error_message(exc),
        data=None,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
    )


# Add routes
app.include_router(auth.router)
app.include_router(profile_router.router)
app.include_router(appointments.router)
app.include_router(partners.router)
app.include_router(store.router)


@app.get("/")
def home():
    try:
        return create_response(
            message="ArogyaMix API running",
            data={"service": "arogyamix-backend"},
            status_code=status.HTTP_200_OK
        )
    except Exception as exc:
        return handle_exception(exc)


@app.get("/api-info")
def api_info():
    return create_response(
        message="API information",
        data={
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "docs_url": app.docs_url,
        },
    )
