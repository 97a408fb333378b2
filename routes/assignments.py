# routes/assignments.py
from fastapi import APIRouter, Depends
import logging

from database import DocumentStore, assignments_store, quizzes_store, users_store
from errors import NotFound
from models.assignment import AssignmentCreate, AssignmentReview, AssignmentSubmit
from services import entities
from services.entities import ASSIGNMENT
from services.reports import build_student_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


@router.post("/add", status_code=201)
async def add_assignment(assignment: AssignmentCreate, store: DocumentStore = Depends(assignments_store)):
    logger.info(f"Creating assignment '{assignment.assignmentName}' for teacher {assignment.teacherCode}")
    saved = await entities.create_entity(store, ASSIGNMENT, assignment.model_dump())
    return {"message": "Assignment created successfully", "assignment": saved}


@router.post("/submit")
async def submit_assignment(submission: AssignmentSubmit, store: DocumentStore = Depends(assignments_store)):
    logger.info(f"Submitting assignment {submission.assignmentCode} for student {submission.studentCode}")
    record = await entities.submit_entity(
        store,
        ASSIGNMENT,
        submission.assignmentCode,
        submission.studentCode,
        [a.model_dump() for a in submission.answers],
    )
    return {
        "message": "Assignment submitted successfully",
        "assignmentCode": submission.assignmentCode,
        "studentCode": submission.studentCode,
        "submission": record,
    }


@router.post("/review")
async def review_assignment(review: AssignmentReview, store: DocumentStore = Depends(assignments_store)):
    logger.info(f"Reviewing assignment {review.assignmentCode} for student {review.studentCode}")
    fields = review.overlay()
    record = await entities.review_entity(store, ASSIGNMENT, review.assignmentCode, review.studentCode, fields)
    return {
        "message": "Assignment reviewed successfully",
        "assignmentCode": review.assignmentCode,
        "studentCode": review.studentCode,
        "submission": record,
    }


@router.get("/all")
async def get_all_assignments(store: DocumentStore = Depends(assignments_store)):
    return await store.find()


@router.get("/assigned-to/{assigned_to}")
async def get_assignments_by_assigned_to(assigned_to: str, store: DocumentStore = Depends(assignments_store)):
    return await store.find({"assignedTo": assigned_to})


@router.get("/teacher/{teacher_code}")
async def get_assignments_by_teacher(teacher_code: str, store: DocumentStore = Depends(assignments_store)):
    return await store.find({"teacherCode": teacher_code})


@router.get("/submitted-students/{assignment_code}")
async def get_submitted_students(
    assignment_code: str,
    store: DocumentStore = Depends(assignments_store),
    users: DocumentStore = Depends(users_store),
):
    students = await entities.submitted_students(store, users, ASSIGNMENT, assignment_code)
    return {"assignmentCode": assignment_code, "total": len(students), "students": students}


@router.get("/student-submission/{assignment_code}/{student_code}")
async def get_assignment_with_student_submission(
    assignment_code: str, student_code: str, store: DocumentStore = Depends(assignments_store)
):
    return await entities.student_submission(store, ASSIGNMENT, assignment_code, student_code)


@router.get("/student-report/{student_code}")
async def get_student_report(
    student_code: str,
    store: DocumentStore = Depends(assignments_store),
    quizzes: DocumentStore = Depends(quizzes_store),
    users: DocumentStore = Depends(users_store),
):
    logger.info(f"Building report for student {student_code}")
    student = await users.find_one({"userCode": student_code})
    if not student:
        raise NotFound(f"Student not found: {student_code}")
    assignments = await entities.list_submitted_by(store, student_code)
    quiz_list = await entities.list_submitted_by(quizzes, student_code)
    return build_student_report(student, assignments, quiz_list)


@router.get("/{assignment_code}")
async def get_assignment_by_code(assignment_code: str, store: DocumentStore = Depends(assignments_store)):
    return await entities.get_entity(store, ASSIGNMENT, assignment_code)
