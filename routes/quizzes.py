# routes/quizzes.py
from fastapi import APIRouter, Depends
import logging

from database import DocumentStore, quizzes_store, users_store
from models.quiz import QuizCreate, QuizReview, QuizSubmit
from services import entities
from services.entities import QUIZ

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quizes", tags=["quizes"])


@router.post("/add", status_code=201)
async def add_quiz(quiz: QuizCreate, store: DocumentStore = Depends(quizzes_store)):
    logger.info(f"Creating quiz '{quiz.quizeName}' for teacher {quiz.teacherCode}")
    saved = await entities.create_entity(store, QUIZ, quiz.model_dump())
    return {"message": "Quiz created successfully", "quize": saved}


@router.post("/submit")
async def submit_quiz(submission: QuizSubmit, store: DocumentStore = Depends(quizzes_store)):
    logger.info(f"Submitting quiz {submission.quizeCode} for student {submission.studentCode}")
    record = await entities.submit_entity(
        store,
        QUIZ,
        submission.quizeCode,
        submission.studentCode,
        [a.model_dump() for a in submission.answers],
    )
    return {
        "message": "Quiz submitted successfully",
        "quizeCode": submission.quizeCode,
        "studentCode": submission.studentCode,
        "submission": record,
    }


@router.post("/review")
async def review_quiz(review: QuizReview, store: DocumentStore = Depends(quizzes_store)):
    logger.info(f"Reviewing quiz {review.quizeCode} for student {review.studentCode}")
    record = await entities.review_entity(store, QUIZ, review.quizeCode, review.studentCode, review.overlay())
    return {
        "message": "Quiz reviewed successfully",
        "quizeCode": review.quizeCode,
        "studentCode": review.studentCode,
        "submission": record,
    }


@router.get("/all")
async def get_all_quizzes(store: DocumentStore = Depends(quizzes_store)):
    return await store.find()


@router.get("/assigned-to/{assigned_to}")
async def get_quizzes_by_assigned_to(assigned_to: str, store: DocumentStore = Depends(quizzes_store)):
    return await store.find({"assignedTo": assigned_to})


@router.get("/teacher/{teacher_code}")
async def get_quizzes_by_teacher(teacher_code: str, store: DocumentStore = Depends(quizzes_store)):
    return await store.find({"teacherCode": teacher_code})


@router.get("/submitted-students/{quize_code}")
async def get_submitted_students(
    quize_code: str,
    store: DocumentStore = Depends(quizzes_store),
    users: DocumentStore = Depends(users_store),
):
    students = await entities.submitted_students(store, users, QUIZ, quize_code)
    return {"quizeCode": quize_code, "total": len(students), "students": students}


@router.get("/student-submission/{quize_code}/{student_code}")
async def get_quiz_with_student_submission(
    quize_code: str, student_code: str, store: DocumentStore = Depends(quizzes_store)
):
    return await entities.student_submission(store, QUIZ, quize_code, student_code)


@router.get("/{quize_code}")
async def get_quiz_by_code(quize_code: str, store: DocumentStore = Depends(quizzes_store)):
    return await entities.get_entity(store, QUIZ, quize_code)
