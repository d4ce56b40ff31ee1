from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bootcamp_directory.applications.interfaces.dtos.envelope import Message
from bootcamp_directory.infrastructure.config.dependencies import get_settings
from bootcamp_directory.infrastructure.logging.logger import Logger, setup_logging
from bootcamp_directory.infrastructure.persistence.database import Database
from bootcamp_directory.presentation.error_handlers import register_exception_handlers
from bootcamp_directory.presentation.middleware import RequestLoggingMiddleware
from bootcamp_directory.presentation.routers import auth, bootcamps, courses, reviews, users

API_PREFIX = "/api/v1"

settings = get_settings()
setup_logging(settings.LOG_LEVEL)
logger = Logger.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Database.connect(settings)
    logger.info(f"Bootcamp directory API running in {settings.ENVIRONMENT} mode")
    try:
        yield
    finally:
        await Database.disconnect()


app = FastAPI(title="Bootcamp Directory API", lifespan=lifespan)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(bootcamps.router, prefix=API_PREFIX)
app.include_router(courses.bootcamp_courses_router, prefix=API_PREFIX)
app.include_router(courses.router, prefix=API_PREFIX)
app.include_router(reviews.bootcamp_reviews_router, prefix=API_PREFIX)
app.include_router(reviews.router, prefix=API_PREFIX)
app.include_router(users.router, prefix=API_PREFIX)


@app.get("/", status_code=HTTPStatus.OK, response_model=Message)
def read_root():
    return {"message": "Bootcamp Directory API"}
