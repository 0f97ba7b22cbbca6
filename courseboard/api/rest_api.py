"""
REST API implementation for the Courseboard service using FastAPI.
"""

import logging
from typing import Dict, Any, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field

from fastapi import FastAPI, HTTPException, Path, status
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.entities import Course, VoteRequest, Enrollment
from ..core.enums import MAX_RECORD_ID, MAX_VOTE_COUNT
from ..core.exceptions import CourseboardException, ResourceNotFoundError, ValidationError
from ..services import CourseBoardService

logger = logging.getLogger(__name__)


# Pydantic models for API
class CourseCreate(BaseModel):
    title: str
    description: str


class CourseResponse(BaseModel):
    id: int
    title: str
    description: str


class VoteRequestCreate(BaseModel):
    course_id: int = Field(..., ge=0, le=MAX_RECORD_ID)


class VoteRequestResponse(BaseModel):
    id: int
    course_id: int
    upvotes: int = Field(..., ge=0, le=MAX_VOTE_COUNT)
    downvotes: int = Field(..., ge=0, le=MAX_VOTE_COUNT)


class EnrollmentRequest(BaseModel):
    student_id: str
    course_id: int = Field(..., ge=0, le=MAX_RECORD_ID)


class EnrollmentResponse(BaseModel):
    student_id: str
    course_id: int


class OperationResponse(BaseModel):
    success: bool
    message: str


class StatisticsResponse(BaseModel):
    success: bool
    message: str
    statistics: Dict[str, Any]


class CourseBoardRestAPI:
    """REST API implementation for the Courseboard service."""

    def __init__(self, service: CourseBoardService):
        self._service = service

        # Create FastAPI app
        self.app = FastAPI(
            title="Courseboard API",
            description="Course listings, community vote requests and enrollments",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        # Add CORS middleware
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        # Setup routes
        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/", response_model=Dict[str, str])
        def root():
            """Root endpoint."""
            return {
                "message": "Courseboard API",
                "version": __version__,
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Course endpoints
        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        def create_course(course_data: CourseCreate):
            """Create a new course."""
            try:
                course = self._service.create_course(course_data.title, course_data.description)
                return self._course_to_response(course)
            except CourseboardException as e:
                raise self._to_http_error(e)

        @self.app.get("/courses", response_model=List[CourseResponse])
        def list_courses():
            """List all courses in creation order."""
            return [self._course_to_response(course) for course in self._service.get_courses()]

        @self.app.get("/courses/{course_id}", response_model=CourseResponse)
        def get_course(course_id: int = Path(..., ge=0, le=MAX_RECORD_ID)):
            """Get a course by ID."""
            try:
                return self._course_to_response(self._service.get_course(course_id))
            except CourseboardException as e:
                raise self._to_http_error(e)

        # Vote request endpoints
        @self.app.post("/vote-requests", response_model=VoteRequestResponse,
                       status_code=status.HTTP_201_CREATED)
        def create_vote_request(request: VoteRequestCreate):
            """Open a vote request for a proposed course."""
            try:
                vote_request = self._service.create_vote_request(request.course_id)
                return self._vote_request_to_response(vote_request)
            except CourseboardException as e:
                raise self._to_http_error(e)

        @self.app.get("/vote-requests", response_model=List[VoteRequestResponse])
        def list_vote_requests():
            """List all open vote requests."""
            return [self._vote_request_to_response(v) for v in self._service.get_vote_requests()]

        @self.app.post("/vote-requests/{vote_id}/upvote", response_model=OperationResponse)
        def vote_up(vote_id: int = Path(..., ge=0, le=MAX_RECORD_ID)):
            """Upvote a vote request."""
            try:
                self._service.vote_up(vote_id)
                return OperationResponse(success=True, message=f"Upvote recorded for {vote_id}")
            except CourseboardException as e:
                raise self._to_http_error(e)

        @self.app.post("/vote-requests/{vote_id}/downvote", response_model=OperationResponse)
        def vote_down(vote_id: int = Path(..., ge=0, le=MAX_RECORD_ID)):
            """Downvote a vote request."""
            try:
                self._service.vote_down(vote_id)
                return OperationResponse(success=True, message=f"Downvote recorded for {vote_id}")
            except CourseboardException as e:
                raise self._to_http_error(e)

        @self.app.delete("/vote-requests/{vote_id}", response_model=OperationResponse)
        def decline_vote_request(vote_id: int = Path(..., ge=0, le=MAX_RECORD_ID)):
            """Decline (remove) a vote request."""
            try:
                self._service.decline_vote_request(vote_id)
                return OperationResponse(success=True, message=f"Vote request {vote_id} declined")
            except CourseboardException as e:
                raise self._to_http_error(e)

        # Enrollment endpoints
        @self.app.post("/enrollments", response_model=EnrollmentResponse,
                       status_code=status.HTTP_201_CREATED)
        def enroll_student(request: EnrollmentRequest):
            """Enroll a student in a course."""
            try:
                enrollment = self._service.enroll_student(request.student_id, request.course_id)
                return self._enrollment_to_response(enrollment)
            except CourseboardException as e:
                raise self._to_http_error(e)

        @self.app.post("/enrollments/dropout", response_model=OperationResponse)
        def dropout_student(request: EnrollmentRequest):
            """Drop a student from a course, removing every matching enrollment."""
            try:
                self._service.dropout_student(request.student_id, request.course_id)
                return OperationResponse(
                    success=True,
                    message=f"Student {request.student_id} dropped from course {request.course_id}"
                )
            except CourseboardException as e:
                raise self._to_http_error(e)

        @self.app.get("/enrollments", response_model=List[EnrollmentResponse])
        def list_enrollments():
            """List all enrollments."""
            return [self._enrollment_to_response(e) for e in self._service.get_enrollments()]

        @self.app.get("/students/{student_id}/enrollments", response_model=List[EnrollmentResponse])
        def get_student_enrollments(student_id: str):
            """List the enrollments of one student."""
            return [
                self._enrollment_to_response(e)
                for e in self._service.get_enrollments_by_student(student_id)
            ]

        # Statistics endpoint
        @self.app.get("/statistics", response_model=StatisticsResponse)
        def get_statistics():
            """Get record counts."""
            return StatisticsResponse(
                success=True,
                message="Statistics retrieved successfully",
                statistics=self._service.get_statistics()
            )

    def _to_http_error(self, error: CourseboardException) -> HTTPException:
        """Map a service error onto an HTTP status."""
        if isinstance(error, ResourceNotFoundError):
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
        if isinstance(error, ValidationError):
            return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
        logger.error("Unhandled service error: %s", error.message)
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                             detail=f"Internal error: {error.message}")

    def _course_to_response(self, course: Course) -> CourseResponse:
        return CourseResponse(id=course.id, title=course.title, description=course.description)

    def _vote_request_to_response(self, vote_request: VoteRequest) -> VoteRequestResponse:
        return VoteRequestResponse(
            id=vote_request.id,
            course_id=vote_request.course_id,
            upvotes=vote_request.upvotes,
            downvotes=vote_request.downvotes
        )

    def _enrollment_to_response(self, enrollment: Enrollment) -> EnrollmentResponse:
        return EnrollmentResponse(student_id=enrollment.student_id, course_id=enrollment.course_id)
