import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from outfit_engine.outfit.router import router as outfit_router
from outfit_engine.shopping.router import router as shopping_router
from outfit_engine.steal_look.router import router as steal_look_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Outfit Engine")

app.include_router(outfit_router)
app.include_router(shopping_router)
app.include_router(steal_look_router)


@app.get("/")
async def root() -> dict[str, str]:
    return {"status": "running"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    # 외부 의존성이 없으므로 프로세스가 떠 있으면 healthy
    return {"status": "healthy"}


# ============================================================
# 커스텀 에러 핸들러
# ============================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Pydantic 검증 에러 핸들러

    - 필수 필드 누락, 타입 에러 → 400 Bad Request
    - 값 범위 위반 (formality 1~10 등) → 422 Unprocessable Entity
    """
    errors = exc.errors()
    first_error = errors[0] if errors else {}
    error_type = first_error.get("type", "")
    loc = first_error.get("loc", [])

    field_name = loc[-1] if loc else ""
    message = _get_error_message(error_type, field_name)

    is_bad_request = (
        error_type in ("missing", "enum")
        or error_type.endswith(("_type", "_parsing"))
    )
    if is_bad_request:
        status_code = status.HTTP_400_BAD_REQUEST
        error_code = "INVALID_REQUEST"
    else:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        error_code = "VALIDATION_ERROR"

    logger.warning("Request validation failed on %s: %s", request.url.path, error_type)

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "errorCode": error_code, "message": message},
    )


def _get_error_message(error_type: str, field_name: object) -> str:
    if error_type == "missing":
        return f"{field_name} is required"

    if error_type == "enum":
        return f"{field_name} has an unsupported value"

    if error_type.endswith(("_type", "_parsing")):
        return f"{field_name} has an invalid type"

    if error_type in ("greater_than_equal", "less_than_equal"):
        return f"{field_name} is out of range"

    return "Invalid request data"


if __name__ == "__main__":
    import uvicorn

    from outfit_engine.config import get_settings

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
