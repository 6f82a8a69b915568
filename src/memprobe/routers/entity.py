"""
Entity allocation endpoint.

Routes:
- `GET /entity/{count}`: allocates `count` Records and returns
  `"allocated: <N> bytes"` as a JSON string.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from starlette.status import HTTP_200_OK, HTTP_400_BAD_REQUEST

from ..allocation.config import Settings
from ..allocation.reporter import AllocationReporter, InvalidCountError

router = APIRouter()


def get_reporter(request: Request) -> AllocationReporter:
    return request.app.state.reporter


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/entity/{count}")
def create_entities(
    count: str,
    reporter: AllocationReporter = Depends(get_reporter),
    settings: Settings = Depends(get_app_settings),
):
    """Allocate `count` records and report their size"""
    try:
        result = reporter.handle(count)
    except InvalidCountError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e))

    if result.body is None:
        if settings.strict_count:
            raise HTTPException(
                status_code=HTTP_400_BAD_REQUEST,
                detail=f"count must be a positive integer, got {count!r}",
            )
        # Nothing written: empty 200
        return Response(status_code=HTTP_200_OK)

    return result.body
