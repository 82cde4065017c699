"""
API tests for exams, questions, submissions and grading.
"""
import pytest

from conftest import auth_header, register

from himaayah.models.result import Result


@pytest.fixture
def teacher(client):
    return register(client, "teacher")


@pytest.fixture
def exam(client, teacher):
    r = client.post(
        "/exams",
        json={"title": "Nahw midterm", "subject_id": 2, "class_id": 1, "duration_minutes": 45},
        headers=auth_header(teacher["token"]),
    )
    assert r.status_code == 201, r.text
    return r.json()


def test_create_exam_requires_teacher(client):
    student = register(client, "student")
    r = client.post("/exams", json={"title": "X", "subject_id": 1, "class_id": 1}, headers=auth_header(student["token"]))
    assert r.status_code == 403


def test_list_exams_joins_subject_and_class(client, exam):
    student = register(client, "student")
    r = client.get("/exams", headers=auth_header(student["token"]))
    assert r.status_code == 200
    row = next(e for e in r.json() if e["id"] == exam["id"])
    assert row["subject_name"] == "Nahw"
    assert row["class_name"] == "Awwal"
    assert row["duration_minutes"] == 45


def test_seeded_subjects_and_classes(client):
    student = register(client, "student")
    subjects = client.get("/subjects", headers=auth_header(student["token"])).json()
    classes = client.get("/classes", headers=auth_header(student["token"])).json()
    assert {"sarf", "nahw", "seerah"} <= {s["code"] for s in subjects}
    assert {"awwal", "awwal_idaadi"} <= {c["code"] for c in classes}


def test_questions_hide_answer(client, teacher, exam):
    r = client.post(
        f"/exams/{exam['id']}/questions",
        json={
            "question_text": "Which is a harf?",
            "q_type": "mcq",
            "options": [{"label": "A", "text": "fi"}, {"label": "B", "text": "kataba"}],
            "answer": "A",
            "marks": 2,
        },
        headers=auth_header(teacher["token"]),
    )
    assert r.status_code == 201, r.text
    assert r.json()["answer"] == "A"
    student = register(client, "student")
    r = client.get(f"/exams/{exam['id']}/questions", headers=auth_header(student["token"]))
    assert r.status_code == 200
    [q] = r.json()
    assert "answer" not in q
    assert q["options"][1] == {"label": "B", "text": "kataba"}
    assert q["marks"] == 2


def test_mcq_needs_options_and_essay_forbids_them(client, teacher, exam):
    r = client.post(
        f"/exams/{exam['id']}/questions",
        json={"question_text": "Pick one", "q_type": "mcq"},
        headers=auth_header(teacher["token"]),
    )
    assert r.status_code == 400
    r = client.post(
        f"/exams/{exam['id']}/questions",
        json={"question_text": "Explain", "q_type": "essay", "options": [{"label": "A", "text": "x"}]},
        headers=auth_header(teacher["token"]),
    )
    assert r.status_code == 400


def test_question_for_missing_exam_is_404(client, teacher):
    r = client.post(
        "/exams/999999/questions",
        json={"question_text": "Explain"},
        headers=auth_header(teacher["token"]),
    )
    assert r.status_code == 404


def test_submit_without_student_profile_is_forbidden(client, db, teacher, exam):
    before = db.query(Result).count()
    r = client.post(
        f"/exams/{exam['id']}/submit",
        json={"answers": {"1": "anything"}},
        headers=auth_header(teacher["token"]),
    )
    assert r.status_code == 403
    assert r.json() == {"error": "Student profile required"}
    db.expire_all()
    assert db.query(Result).count() == before


def test_submit_stores_tagged_answers_ungraded(client, exam):
    student = register(client, "student")
    r = client.post(
        f"/exams/{exam['id']}/submit",
        json={"answers": {"10": {"kind": "choice", "option": "A"}, "11": "An essay answer"}},
        headers=auth_header(student["token"]),
    )
    assert r.status_code == 201, r.text
    result = r.json()
    assert result["answers"] == {
        "10": {"kind": "choice", "option": "A"},
        "11": {"kind": "text", "text": "An essay answer"},
    }
    for field in ("total_marks", "percentage", "grade", "graded_by", "graded_at"):
        assert result[field] is None


def test_submitting_twice_creates_two_results(client, exam):
    student = register(client, "student")
    ids = set()
    for _ in range(2):
        r = client.post(f"/exams/{exam['id']}/submit", json={"answers": {}}, headers=auth_header(student["token"]))
        assert r.status_code == 201
        ids.add(r.json()["id"])
    assert len(ids) == 2


def test_grade_requires_teacher(client, exam):
    student = register(client, "student")
    result = client.post(f"/exams/{exam['id']}/submit", json={"answers": {}}, headers=auth_header(student["token"])).json()
    r = client.post(
        f"/results/{result['id']}/grade",
        json={"total_marks": 10, "percentage": 100, "grade": "A"},
        headers=auth_header(student["token"]),
    )
    assert r.status_code == 403


def test_grading_twice_overwrites(client, teacher, exam):
    student = register(client, "student")
    result = client.post(f"/exams/{exam['id']}/submit", json={"answers": {}}, headers=auth_header(student["token"])).json()
    first = client.post(
        f"/results/{result['id']}/grade",
        json={"total_marks": 12, "percentage": 60, "grade": "C"},
        headers=auth_header(teacher["token"]),
    )
    assert first.status_code == 200, first.text
    assert first.json()["grade"] == "C"
    assert first.json()["graded_by"] == teacher["user"]["id"]
    assert first.json()["graded_at"] is not None

    admin = register(client, "admin")
    second = client.post(
        f"/results/{result['id']}/grade",
        json={"total_marks": 18, "percentage": 90, "grade": "A"},
        headers=auth_header(admin["token"]),
    )
    assert second.status_code == 200
    body = second.json()
    assert body["grade"] == "A"
    assert body["total_marks"] == 18
    assert body["percentage"] == 90
    assert body["graded_by"] == admin["user"]["id"]


def test_grading_missing_result_is_404(client, teacher):
    r = client.post(
        "/results/999999/grade",
        json={"total_marks": 1, "percentage": 1, "grade": "F"},
        headers=auth_header(teacher["token"]),
    )
    assert r.status_code == 404
