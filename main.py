# main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from config import BCRYPT_ROUNDS, HOST, LOG_LEVEL, PORT
from database import client, users
from repositories.user import UserRepository, make_pwd_context
from routes import auth
from utils.errors import UNEXPECTED_MESSAGE
from utils.logger import configure_logging

configure_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        UserRepository(users, make_pwd_context(BCRYPT_ROUNDS)).ensure_indexes()
    except PyMongoError as exc:
        logger.error("Could not create user indexes: %s", exc)
    yield
    client.close()


app = FastAPI(title="Signup Service", lifespan=lifespan)

app.include_router(auth.router, prefix="/api/auth")


@app.exception_handler(RequestValidationError)
async def handle_request_validation(_request: Request, exc: RequestValidationError):
    logger.warning("Rejected request body at %s", [err["loc"] for err in exc.errors()])
    return JSONResponse(status_code=400, content={"message": "Invalid JSON payload"})


@app.exception_handler(Exception)
async def handle_unexpected(_request: Request, exc: Exception):
    logger.exception("Unexpected error: %s", type(exc).__name__)
    return JSONResponse(status_code=500, content={"message": UNEXPECTED_MESSAGE})


@app.get("/api/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
