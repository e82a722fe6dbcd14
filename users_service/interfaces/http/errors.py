import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger()


def _describe(err: dict) -> str:
    # loc = ("body", "firstName") -> "firstName"
    loc = ".".join(str(p) for p in err.get("loc", ())[1:])
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(_describe(e) for e in exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("database_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
