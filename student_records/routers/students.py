from typing import Annotated, Any, Dict

from fastapi import APIRouter, Body, Depends, Path, Request, status

from student_records.schemas.student_schemas import (
    SortQueryParams,
    StudentListQueryParams,
)
from student_records.services.student_service import (
    StudentService,
    get_student_service,
)
from student_records.utils.responses import ResponseBuilder

students_router = APIRouter()

StudentIdPath = Annotated[str, Path(description="Student ID")]
RawStudentForm = Annotated[
    Dict[str, Any],
    Body(
        description="Raw form values keyed by field name; numeric fields may be sent as text",
        examples=[
            {
                "id": "1004",
                "name": "Neha Sharma",
                "email": "neha.sharma@email.com",
                "phone": "9123456780",
                "course": "MCA",
                "semester": "2",
                "gpa": "3.9",
            }
        ],
    ),
]


@students_router.get(
    "/",
    status_code=status.HTTP_200_OK,
    summary="List or search student records",
    description="Return every student record, or only those whose id, name, email or course contains the search term (case-insensitive).",
)
async def list_students(
    request: Request,
    query_params: Annotated[StudentListQueryParams, Depends()],
    student_service: StudentService = Depends(get_student_service),
):
    students = student_service.list_students(query_params.q)

    return ResponseBuilder.success(
        request=request,
        data=students,
        message=StudentService.build_list_message(len(students), query_params.q),
    )


@students_router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    summary="Add a student record",
    description="Validate the raw form and append the record. Returns the updated collection.",
)
async def add_student(
    request: Request,
    form: RawStudentForm,
    student_service: StudentService = Depends(get_student_service),
):
    students = student_service.add_student(form)

    return ResponseBuilder.success(
        request=request,
        data=students,
        message="Student record added successfully",
        status_code=status.HTTP_201_CREATED,
    )


@students_router.post(
    "/sort/{field}",
    status_code=status.HTTP_200_OK,
    summary="Sort student records by a column",
    description="Sort by the given column. Without an explicit order, repeated sorts of the same column alternate between ascending and descending.",
)
async def sort_students(
    request: Request,
    field: Annotated[str, Path(description="Column to sort by")],
    query_params: Annotated[SortQueryParams, Depends()],
    student_service: StudentService = Depends(get_student_service),
):
    result = student_service.sort_students(field, query_params.order)

    return ResponseBuilder.success(
        request=request,
        data=result["students"],
        message=f"Sorted students by {field} ({result['order']})",
        meta={"sort_field": result["field"], "sort_order": result["order"]},
    )


@students_router.get(
    "/{student_id}",
    status_code=status.HTTP_200_OK,
    summary="Preview a student record",
    description="Fetch a single record, e.g. to confirm a deletion or prefill the edit form. Changes nothing.",
)
async def get_student(
    request: Request,
    student_id: StudentIdPath,
    student_service: StudentService = Depends(get_student_service),
):
    return ResponseBuilder.success(
        request=request,
        data=student_service.get_student(student_id),
        message="Student record retrieved successfully",
    )


@students_router.put(
    "/{student_id}",
    status_code=status.HTTP_200_OK,
    summary="Update a student record",
    description="Replace the record in place. The ID may change as long as no other record holds it.",
)
async def update_student(
    request: Request,
    student_id: StudentIdPath,
    form: RawStudentForm,
    student_service: StudentService = Depends(get_student_service),
):
    students = student_service.update_student(student_id, form)

    return ResponseBuilder.success(
        request=request,
        data=students,
        message="Student record updated successfully!",
    )


@students_router.delete(
    "/{student_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete a student record",
    description="Remove the record after the client has confirmed the preview. Returns the updated collection.",
)
async def delete_student(
    request: Request,
    student_id: StudentIdPath,
    student_service: StudentService = Depends(get_student_service),
):
    students = student_service.delete_student(student_id)

    return ResponseBuilder.success(
        request=request,
        data=students,
        message="Student record deleted successfully!",
    )
