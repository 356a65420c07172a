from fastapi import APIRouter

from student_records.routers.health import health_router
from student_records.routers.students import students_router

main_router = APIRouter()

main_router.include_router(health_router, prefix="/health", tags=["Health"])
main_router.include_router(
    students_router, prefix="/students", tags=["Student Records"]
)
