"""
REST API implementation for the Coursebook platform using FastAPI.

The caller identity travels in the X-Caller header. A non-zero
X-Value-Transfer header models funds attached to the call and is always
rejected.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Dict, List

from pydantic import BaseModel, Field

from fastapi import FastAPI, Depends, Header, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..core.entities import Evaluation, GradeCell, StudentRecord
from ..core.enums import GradeKind
from ..core.exceptions import (
    CoursebookException, PermissionDenied, CourseClosed, RosterError, NotEnrolled,
    InvalidEvaluationIndex, ValidationError, ValueTransferRejected
)
from ..services import CourseService


# Most specific first; the first class the error is an instance of wins.
ERROR_STATUS = [
    (NotEnrolled, status.HTTP_403_FORBIDDEN),
    (PermissionDenied, status.HTTP_403_FORBIDDEN),
    (CourseClosed, status.HTTP_409_CONFLICT),
    (RosterError, status.HTTP_409_CONFLICT),
    (InvalidEvaluationIndex, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ValueTransferRejected, status.HTTP_400_BAD_REQUEST),
]


def status_for(error: CoursebookException) -> int:
    for error_type, code in ERROR_STATUS:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


# Pydantic models for API
class CallContext(BaseModel):
    caller: str
    value: int = 0


class CoordinatorUpdate(BaseModel):
    identity: str = Field(..., min_length=1)


class TeacherCreate(BaseModel):
    identity: str = Field(..., min_length=1)
    name: str


class TeacherResponse(BaseModel):
    identity: str
    name: str
    registered: bool


class StudentCreate(BaseModel):
    identity: str = Field(..., min_length=1)
    name: str
    id_document: str
    email: str = ""


class SelfEnrollment(BaseModel):
    name: str
    id_document: str
    email: str = ""


class StudentResponse(BaseModel):
    identity: str
    name: str
    id_document: str
    email: str


class EvaluationCreate(BaseModel):
    name: str
    due_timestamp: int = Field(..., ge=0)
    weight: int = Field(..., ge=0)
    min_pass_score: Decimal = Field(..., ge=0)


class EvaluationResponse(BaseModel):
    index: int
    name: str
    due_timestamp: int
    weight: int
    min_pass_score: int


class GradeUpdate(BaseModel):
    kind: GradeKind
    score: Decimal = Decimal(0)


class GradeResponse(BaseModel):
    kind: GradeKind
    score: int
    display: str


class CourseResponse(BaseModel):
    id: str
    name: str
    term: str
    owner: str
    coordinator: Optional[str] = None
    state: str
    version: int
    statistics: Dict[str, int]


class StatisticsResponse(BaseModel):
    teacher_count: int
    enrollment_count: int
    evaluation_count: int


def call_context(
    x_caller: str = Header(""),
    x_value_transfer: int = Header(0),
) -> CallContext:
    """Resolve the caller identity and attached value from request headers."""
    return CallContext(caller=x_caller, value=x_value_transfer)


class CoursebookRestAPI:
    """REST API implementation for one course."""

    def __init__(self, service: CourseService):
        self._service = service

        self.app = FastAPI(
            title="Coursebook API",
            description="Role-gated course record and grade aggregation service",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._setup_error_handlers()
        self._setup_routes()

    def _setup_error_handlers(self):
        @self.app.exception_handler(CoursebookException)
        async def coursebook_error(request: Request, exc: CoursebookException):
            return JSONResponse(
                status_code=status_for(exc),
                content={"error_code": exc.error_code, "detail": exc.message}
            )

    def _setup_routes(self):
        """Setup API routes."""
        service = self._service

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "Coursebook API",
                "version": __version__,
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Course endpoints
        @self.app.get("/course", response_model=CourseResponse)
        async def get_course(ctx: CallContext = Depends(call_context)):
            info = service.course_info(value=ctx.value)
            stats = service.get_statistics(value=ctx.value)
            return CourseResponse(
                id=info['id'],
                name=info['name'],
                term=info['term'],
                owner=info['owner'],
                coordinator=info['coordinator'],
                state=info['state'],
                version=info['version'],
                statistics=stats.to_dict()
            )

        @self.app.put("/course/coordinator", status_code=status.HTTP_204_NO_CONTENT)
        async def set_coordinator(data: CoordinatorUpdate, ctx: CallContext = Depends(call_context)):
            service.set_coordinator(ctx.caller, data.identity, value=ctx.value)

        @self.app.post("/course/close", status_code=status.HTTP_204_NO_CONTENT)
        async def close_course(ctx: CallContext = Depends(call_context)):
            service.close(ctx.caller, value=ctx.value)

        # Teacher endpoints
        @self.app.post("/teachers", response_model=TeacherResponse)
        async def add_teacher(data: TeacherCreate, ctx: CallContext = Depends(call_context)):
            """Register a teacher. Repeats keep the first name."""
            written = service.add_teacher(ctx.caller, data.identity, data.name, value=ctx.value)
            return TeacherResponse(
                identity=data.identity,
                name=service.teacher_name(data.identity),
                registered=written
            )

        @self.app.get("/teachers", response_model=List[TeacherResponse])
        async def list_teachers(ctx: CallContext = Depends(call_context)):
            return [
                TeacherResponse(identity=identity, name=service.teacher_name(identity), registered=True)
                for identity in service.teachers(value=ctx.value)
            ]

        @self.app.get("/teachers/{identity}", response_model=TeacherResponse)
        async def get_teacher(identity: str, ctx: CallContext = Depends(call_context)):
            name = service.teacher_name(identity, value=ctx.value)
            if not name:
                return JSONResponse(
                    status_code=status.HTTP_404_NOT_FOUND,
                    content={"error_code": "teacher_not_found", "detail": "Teacher not found"}
                )
            return TeacherResponse(identity=identity, name=name, registered=True)

        # Student endpoints
        @self.app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        async def enroll_student(data: StudentCreate, ctx: CallContext = Depends(call_context)):
            record = service.enroll_by_admin(
                ctx.caller, data.identity, data.name, data.id_document, data.email, value=ctx.value
            )
            return self._student_to_response(data.identity, record)

        @self.app.post("/students/self", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        async def self_enroll(data: SelfEnrollment, ctx: CallContext = Depends(call_context)):
            record = service.self_enroll(ctx.caller, data.name, data.id_document, data.email, value=ctx.value)
            return self._student_to_response(ctx.caller, record)

        @self.app.get("/students", response_model=List[str])
        async def list_students(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1),
                                ctx: CallContext = Depends(call_context)):
            """Enrolled identities in enrollment order."""
            students = service.enrolled_students(value=ctx.value)
            return students[skip:skip + limit]

        @self.app.get("/students/me", response_model=StudentResponse)
        async def get_own_record(ctx: CallContext = Depends(call_context)):
            record = service.get_own_record(ctx.caller, value=ctx.value)
            return self._student_to_response(ctx.caller, record)

        @self.app.get("/students/{identity}", response_model=StudentResponse)
        async def get_student(identity: str, ctx: CallContext = Depends(call_context)):
            record = service.student_record(identity, value=ctx.value)
            if record is None:
                return JSONResponse(
                    status_code=status.HTTP_404_NOT_FOUND,
                    content={"error_code": "student_not_found", "detail": "Student not found"}
                )
            return self._student_to_response(identity, record)

        # Evaluation endpoints
        @self.app.post("/evaluations", response_model=EvaluationResponse, status_code=status.HTTP_201_CREATED)
        async def create_evaluation(data: EvaluationCreate, ctx: CallContext = Depends(call_context)):
            index = service.create_evaluation(
                ctx.caller, data.name, data.due_timestamp, data.weight, data.min_pass_score,
                value=ctx.value
            )
            return self._evaluation_to_response(index, service.get_evaluation(index))

        @self.app.get("/evaluations", response_model=List[EvaluationResponse])
        async def list_evaluations(ctx: CallContext = Depends(call_context)):
            return [
                self._evaluation_to_response(index, evaluation)
                for index, evaluation in enumerate(service.list_evaluations(value=ctx.value))
            ]

        @self.app.get("/evaluations/{index}", response_model=EvaluationResponse)
        async def get_evaluation(index: int, ctx: CallContext = Depends(call_context)):
            return self._evaluation_to_response(index, service.get_evaluation(index, value=ctx.value))

        # Grade endpoints
        @self.app.get("/grades/me/{index}", response_model=GradeResponse)
        async def get_own_grade(index: int, ctx: CallContext = Depends(call_context)):
            return self._grade_to_response(service.get_own_grade(ctx.caller, index, value=ctx.value))

        @self.app.put("/grades/{identity}/{index}", response_model=GradeResponse)
        async def set_grade(identity: str, index: int, data: GradeUpdate,
                            ctx: CallContext = Depends(call_context)):
            cell = service.set_grade(ctx.caller, identity, index, data.kind, data.score, value=ctx.value)
            return self._grade_to_response(cell)

        @self.app.get("/grades/{identity}/{index}", response_model=GradeResponse)
        async def get_grade(identity: str, index: int, ctx: CallContext = Depends(call_context)):
            return self._grade_to_response(service.get_grade(identity, index, value=ctx.value))

        # Final grade endpoints
        @self.app.get("/finals/me", response_model=GradeResponse)
        async def get_own_final(ctx: CallContext = Depends(call_context)):
            return self._grade_to_response(service.compute_own_final(ctx.caller, value=ctx.value))

        @self.app.get("/finals/{identity}", response_model=GradeResponse)
        async def get_final(identity: str, ctx: CallContext = Depends(call_context)):
            return self._grade_to_response(service.compute_final_for(identity, value=ctx.value))

        # Statistics endpoints
        @self.app.get("/statistics", response_model=StatisticsResponse)
        async def get_statistics(ctx: CallContext = Depends(call_context)):
            return StatisticsResponse(**service.get_statistics(value=ctx.value).to_dict())

    def _student_to_response(self, identity: str, record: StudentRecord) -> StudentResponse:
        """Convert a StudentRecord to response model."""
        return StudentResponse(identity=identity, **record.to_dict())

    def _evaluation_to_response(self, index: int, evaluation: Evaluation) -> EvaluationResponse:
        return EvaluationResponse(index=index, **evaluation.to_dict())

    def _grade_to_response(self, cell: GradeCell) -> GradeResponse:
        return GradeResponse(kind=cell.kind, score=cell.score, display=cell.display)
