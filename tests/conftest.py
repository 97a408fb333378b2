"""Shared fixtures: the FastAPI app wired to an in-memory Motor database."""

import os
import uuid

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from database import get_db, init_indexes
from main import app


@pytest.fixture
async def db():
    database = AsyncMongoMockClient()[f"classwork_test_{uuid.uuid4().hex}"]
    await init_indexes(database)
    return database


@pytest.fixture
async def client(db):
    app.dependency_overrides[get_db] = lambda: db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def assignment_payload():
    return {
        "teacherCode": "TEA1234",
        "assignmentName": "Algebra Basics",
        "subject": "Math",
        "dueDate": "2026-12-01T00:00:00Z",
        "assignedTo": "8class A",
        "questions": {
            "1": {"questionNo": 1, "question": "What is 6 x 7?", "difficulties": "easy"},
        },
    }


@pytest.fixture
def quiz_payload():
    return {
        "teacherCode": "TEA1234",
        "quizeName": "Geometry Quiz",
        "subject": "Math",
        "dueDate": "2026-12-01T00:00:00Z",
        "assignedTo": "8class A",
        "questions": {
            "q1": {
                "question": "Which shape has three sides?",
                "options": {"op1": "Square", "op2": "Triangle", "op3": "Circle", "op4": "Line"},
                "correctOption": "B",
            },
        },
    }


@pytest.fixture
def user_payload():
    return {
        "fullName": "Stuart Student",
        "email": "Stuart@Example.com",
        "mobileNumber": "5550001111",
        "password": "secret123",
        "role": "student",
        "className": "8class A",
    }
