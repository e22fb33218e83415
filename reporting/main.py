import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from reporting.core import config
from reporting.core.errors import ReportingError
from reporting.database import Base, engine
from reporting.models import course, monitoring, program, rating, report, user  # noqa: F401
from reporting.routes import (
    auth_routes,
    course_routes,
    dashboard_routes,
    export_routes,
    monitoring_routes,
    program_routes,
    rating_routes,
    report_routes,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

app = FastAPI(title='LUCT Reporting API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.exception_handler(ReportingError)
async def reporting_error_handler(_request: Request, exc: ReportingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={'error': describe_validation_error(exc)})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error('Unhandled database error', exc_info=exc)
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})


def describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return 'Invalid request'
    first = errors[0]
    if first.get('type') == 'json_invalid':
        return 'Invalid JSON body'
    location = [str(part) for part in first.get('loc', ()) if part != 'body']
    message = first.get('msg', 'Invalid value')
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


@app.get('/api/health')
def health():
    return {
        'status': 'ok',
        'message': 'LUCT Reporting System API is running',
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }


app.include_router(auth_routes.router, prefix='/api')
app.include_router(course_routes.router, prefix='/api')
app.include_router(report_routes.router, prefix='/api')
app.include_router(monitoring_routes.router, prefix='/api')
app.include_router(rating_routes.router, prefix='/api')
app.include_router(program_routes.router, prefix='/api')
app.include_router(dashboard_routes.router, prefix='/api')
app.include_router(export_routes.router, prefix='/api')
