from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from pymongo.errors import PyMongoError

from contesthub.core import config, check_required_settings
from contesthub.database import Database
from contesthub.routes.auth.auth_routes import router as auth_router
from contesthub.routes.auth.user_routes import router as user_router
from contesthub.routes.contest.contest_routes import router as contest_router
from contesthub.routes.contest.submission_routes import router as submission_router
from contesthub.routes.contest.leaderboard_routes import router as leaderboard_router
from contesthub.routes.payment.package_routes import router as package_router
from contesthub.routes.payment.payment_routes import router as payment_router
from contesthub.utils.errors import ServiceError
from contesthub.utils.response import error_response, validation_error_response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for the application"""
    # Startup
    check_required_settings()
    
    database = Database()
    try:
        await database.connect_db()
    except PyMongoError as e:
        # Requests retry the connection and answer 503 until it succeeds
        print(f"[ERROR] MongoDB not reachable at startup: {e}")
    app.state.database = database
    
    yield
    # Shutdown
    await database.close_db()


app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="ContestHub API with Authentication, Contests, Submissions, Leaderboard and Packages",
    lifespan=lifespan
)

# CORS middleware
cors_origins = [
    config.FRONTEND_URL,
    "http://localhost:5173",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if not config.DEBUG else ["*"],
    allow_credentials=not config.DEBUG,  # Can't use credentials with wildcard origin
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return error_response(message=exc.message, status_code=exc.status_code)


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    print(f"[ERROR] Database error on {request.method} {request.url.path}: {exc}")
    return error_response(message="Database unavailable", status_code=503)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {
        ".".join(str(part) for part in error["loc"]): error["msg"]
        for error in exc.errors()
    }
    return validation_error_response(errors=errors)


app.include_router(auth_router)
app.include_router(user_router)
app.include_router(contest_router)
app.include_router(submission_router)
app.include_router(leaderboard_router)
app.include_router(package_router)
app.include_router(payment_router)


@app.get("/")
async def read_root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {config.APP_NAME} API",
        "version": config.APP_VERSION,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
