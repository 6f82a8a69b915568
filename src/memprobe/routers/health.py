"""
Health Check Endpoint for memprobe
This FastAPI router defines a simple health check endpoint to verify that the service is running.
Routes:
- `GET /health`: Returns HTTP 200 OK if the service is alive.
"""

from fastapi import APIRouter, Request, Response
from starlette.status import HTTP_200_OK

router = APIRouter()


@router.get("/health")
async def health(_: Request):
    return Response(status_code=HTTP_200_OK)
