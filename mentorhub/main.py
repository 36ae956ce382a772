from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from mentorhub import models  # noqa: F401  registers tables on Base.metadata
from mentorhub.api.errors import domain_exception_handler, validation_exception_handler
from mentorhub.api.v1 import api_router
from mentorhub.config import settings
from mentorhub.core.exceptions import MentorHubError
from mentorhub.core.logging import setup_logging
from mentorhub.database import Base, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.STORAGE_BACKEND == "sql":
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(MentorHubError, domain_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.include_router(api_router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}


def run():
    import uvicorn

    uvicorn.run("mentorhub.main:app", host=settings.HOST, port=settings.PORT)
