"""Single place that turns a service result into an HTTP response."""

from fastapi.responses import JSONResponse

from houseback.services.results import ServiceResult


def render(result: ServiceResult) -> JSONResponse:
    return JSONResponse(status_code=int(result.status_code), content=result.payload())
