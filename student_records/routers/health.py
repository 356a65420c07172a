from fastapi import APIRouter, Request

from student_records.config.settings import settings
from student_records.utils.responses import ResponseBuilder

health_router = APIRouter()


@health_router.get("/")
async def health_check(request: Request):
    """
    Basic health check endpoint

    Returns application status and the number of records held
    """
    return ResponseBuilder.success(
        request=request,
        data={
            "status": "healthy",
            "service": settings.NAME,
            "version": settings.VERSION,
            "students": len(request.app.state.record_store),
        },
        message="Service is running",
    )
