import asyncio
import os
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from practice_tracker.auth.route import auth_router
from practice_tracker.config import Config, logger
from practice_tracker.db.main import close_db, init_db
from practice_tracker.errors import register_exception_handlers
from practice_tracker.submission.route import submission_router


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        client = request.client.host if request.client else "unknown"
        logger.info(
            f"Request started: {request.method} {request.url.path} - "
            f"ID: {request_id} - Client: {client}"
        )
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            logger.info(
                f"Request completed: {request.method} {request.url.path} - "
                f"ID: {request_id} - Status: {response.status_code} - "
                f"Time: {process_time:.4f}s"
            )
            return response
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path} - "
                f"ID: {request_id} - Error: {e} - "
                f"Time: {process_time:.4f}s"
            )
            raise


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Answers 504 when a request runs longer than ``timeout`` seconds."""

    def __init__(self, app, timeout: float):
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(self, request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"Request timed out after {self.timeout}s: "
                f"{request.method} {request.url.path}"
            )
            return JSONResponse(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                content={"message": "Request timed out"},
            )


@asynccontextmanager
async def life_span(app: FastAPI):
    logger.info(f"Server is starting... (environment: {Config.ENVIRONMENT})")
    if os.environ.get("TESTING") != "True":
        try:
            await init_db()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise
    else:
        logger.info("Skipping database initialization for tests")
    yield
    await close_db()
    logger.info("Server has been stopped")


app = FastAPI(
    title="Practice Tracker API",
    description="Track daily competitive-programming practice submissions",
    version="1.0.0",
    lifespan=life_span,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TimeoutMiddleware, timeout=Config.REQUEST_TIMEOUT_SECONDS)

app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index():
    return '<h1 style="font-family: Arial;">Server is running!</h1>'


app.include_router(auth_router, prefix="/api", tags=["auth"])
app.include_router(submission_router, prefix="/api")

logger.info("Application startup complete")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=Config.API_SERVER_HOST, port=Config.API_SERVER_PORT)
