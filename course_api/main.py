import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from course_api.core import config
from course_api.core.errors import ApiError
from course_api.database import Store, build_store
from course_api.routes import course_routes, user_routes

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=config.LOG_LEVEL,
            format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        )


def error_detail(exc: Exception) -> dict:
    if config.is_production():
        return {}
    return {
        'type': type(exc).__name__,
        'detail': str(exc),
        'stack': traceback.format_exception(type(exc), exc, exc.__traceback__),
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.body, headers=exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={'message': 'Route Not Found'},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={'message': exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={'errors': [error['msg'] for error in exc.errors()]},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception('Global error handler: %s %s', request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'message': str(exc), 'error': error_detail(exc)},
        )


def initialize_database(store: Store) -> None:
    try:
        store.connect()
        store.create_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


def create_app(store: Store | None = None) -> FastAPI:
    configure_logging()
    config.validate_runtime_config()

    store = store or build_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        initialize_database(store)
        yield
        store.disconnect()

    app = FastAPI(title='Course Catalog API', lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
        expose_headers=['Location'],
    )

    register_exception_handlers(app)

    @app.get('/')
    def root():
        return {'message': 'Welcome to the REST API project!'}

    app.include_router(user_routes.router, prefix='/api')
    app.include_router(course_routes.router, prefix='/api')

    return app


app = create_app()
