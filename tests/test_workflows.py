"""
Tests for the end-to-end flows: syllabus -> plan -> sessions, summaries, tutor chat
"""
import json
import pytest
from datetime import date

from studyhub.crud import create_user, get_chat_messages_by_user, get_summaries_by_user, get_syllabus
from studyhub.generators import GenerationError, StudyAssistant
from studyhub.schemas import StudyPreferences, SummaryFormat, UserCreate
from studyhub.workflows import (
    NotFoundError,
    chat_with_tutor,
    create_plan_from_syllabus,
    default_plan_window,
    exam_dates_for,
    summarize_and_save,
    upload_syllabus
)

SYLLABUS_REPLY = json.dumps({
    "courseName": "Linear Algebra",
    "instructor": "Prof. Strang",
    "topics": [{"name": "Vectors", "description": "Spaces and bases"}],
    "examDates": [
        {"name": "Midterm", "date": "2026-11-05"},
        {"name": "Final", "date": "2026-12-17"}
    ]
})

PLAN_REPLY = json.dumps({
    "title": "Linear Algebra Plan",
    "description": "Vectors then matrices",
    "sessions": [
        {"title": "Vectors", "description": "Ch. 1", "date": "2026-10-20", "duration": 60},
        {"title": "Matrices", "description": "Ch. 2", "date": "2026-10-22", "duration": 90}
    ]
})


class TestSyllabusToPlan:

    def setup_method(self):
        self.preferences = StudyPreferences(start_date=date(2026, 10, 19), end_date=date(2026, 11, 4))

    def test_upload_stores_parsed_content(self, db, user, llm):
        llm.responses = [SYLLABUS_REPLY]
        syllabus = upload_syllabus(db, StudyAssistant(llm=llm), user.id, "linalg", "raw syllabus")

        stored = get_syllabus(db, syllabus.id)
        assert stored.title == "linalg"
        assert stored.content == "raw syllabus"
        assert stored.course_name == "Linear Algebra"
        assert stored.parsed_content["instructor"] == "Prof. Strang"

    def test_upload_falls_back_when_unparseable(self, db, user, llm):
        llm.responses = ["not json"]
        syllabus = upload_syllabus(db, StudyAssistant(llm=llm), user.id, "mystery", "raw")

        assert syllabus.course_name == "Untitled Course"
        assert syllabus.parsed_content["topics"] == [
            {"name": "General Topics", "description": "Extracted from syllabus"}
        ]
        assert syllabus.parsed_content["examDates"] == []

    def test_plan_uses_syllabus_content_and_exam_dates(self, db, user, llm):
        llm.responses = [SYLLABUS_REPLY, PLAN_REPLY]
        assistant = StudyAssistant(llm=llm)
        syllabus = upload_syllabus(db, assistant, user.id, "linalg", "raw syllabus text")

        plan = create_plan_from_syllabus(db, assistant, user.id, syllabus.id, self.preferences)

        prompt = llm.generate_calls[1]["prompt"]
        assert "Syllabus Content: raw syllabus text" in prompt
        assert "Exam Dates: 2026-11-05, 2026-12-17" in prompt
        assert plan.title == "Linear Algebra Plan"
        assert plan.start_date == date(2026, 10, 19)
        assert plan.end_date == date(2026, 11, 4)
        assert [s.title for s in plan.sessions] == ["Vectors", "Matrices"]
        assert all(s.completed is False for s in plan.sessions)

    def test_fallback_plan_is_persisted(self, db, user, llm):
        llm.responses = [SYLLABUS_REPLY, "the model rambled"]
        assistant = StudyAssistant(llm=llm)
        syllabus = upload_syllabus(db, assistant, user.id, "linalg", "raw")

        plan = create_plan_from_syllabus(db, assistant, user.id, syllabus.id, self.preferences)

        assert plan.title == "Study Plan"
        assert len(plan.sessions) == 1
        assert plan.sessions[0].date == date.today()
        assert plan.sessions[0].duration == 60

    def test_unknown_syllabus(self, db, user, llm):
        with pytest.raises(NotFoundError):
            create_plan_from_syllabus(db, StudyAssistant(llm=llm), user.id, 42, self.preferences)
        assert llm.generate_calls == []

    def test_other_users_syllabus(self, db, user, llm):
        llm.responses = [SYLLABUS_REPLY]
        assistant = StudyAssistant(llm=llm)
        syllabus = upload_syllabus(db, assistant, user.id, "linalg", "raw")
        intruder = create_user(db, UserCreate(username="mallory"))

        with pytest.raises(NotFoundError):
            create_plan_from_syllabus(db, assistant, intruder.id, syllabus.id, self.preferences)

    def test_model_failure_creates_nothing(self, db, user, llm):
        llm.responses = [SYLLABUS_REPLY]
        assistant = StudyAssistant(llm=llm)
        syllabus = upload_syllabus(db, assistant, user.id, "linalg", "raw")
        llm.error = ConnectionError("down")

        with pytest.raises(GenerationError):
            create_plan_from_syllabus(db, assistant, user.id, syllabus.id, self.preferences)
        assert user.study_plans == []


class TestExamDates:

    def test_no_parsed_content(self, db, user, llm):
        llm.responses = [SYLLABUS_REPLY]
        syllabus = upload_syllabus(db, StudyAssistant(llm=llm), user.id, "t", "raw")
        syllabus.parsed_content = None
        assert exam_dates_for(syllabus) == []

    def test_dates_in_order(self, db, user, llm):
        llm.responses = [SYLLABUS_REPLY]
        syllabus = upload_syllabus(db, StudyAssistant(llm=llm), user.id, "t", "raw")
        assert exam_dates_for(syllabus) == ["2026-11-05", "2026-12-17"]

    def test_invalid_stored_content_does_not_block_planning(self, db, user, llm):
        llm.responses = [SYLLABUS_REPLY, PLAN_REPLY]
        assistant = StudyAssistant(llm=llm)
        syllabus = upload_syllabus(db, assistant, user.id, "t", "raw")
        syllabus.parsed_content = {"courseName": "X", "examDates": [{"date": "2026-11-02"}]}
        db.commit()

        assert exam_dates_for(syllabus) == []

        preferences = StudyPreferences(start_date=date(2026, 10, 19), end_date=date(2026, 11, 4))
        plan = create_plan_from_syllabus(db, assistant, user.id, syllabus.id, preferences)

        assert "Exam Dates: None provided" in llm.generate_calls[1]["prompt"]
        assert [s.title for s in plan.sessions] == ["Vectors", "Matrices"]


class TestSummarizeAndSave:

    def test_saves_summary(self, db, user, llm):
        llm.responses = ["- point one"]
        summary = summarize_and_save(
            db, StudyAssistant(llm=llm), user.id, "long notes", "Week 1", SummaryFormat.paragraphs
        )

        assert summary.title == "Week 1"
        assert summary.original_content == "long notes"
        assert summary.summary == "- point one"
        assert "short paragraphs" in llm.generate_calls[0]["prompt"]

    def test_default_title(self, db, user, llm):
        llm.responses = ["- point"]
        summary = summarize_and_save(db, StudyAssistant(llm=llm), user.id, "notes")
        assert summary.title == "Untitled Summary"

    def test_empty_content_rejected(self, db, user, llm):
        with pytest.raises(ValueError, match="No content"):
            summarize_and_save(db, StudyAssistant(llm=llm), user.id, "   ")
        assert llm.generate_calls == []

    def test_failure_saves_nothing(self, db, user, llm):
        llm.error = RuntimeError("boom")
        with pytest.raises(GenerationError):
            summarize_and_save(db, StudyAssistant(llm=llm), user.id, "notes")
        assert get_summaries_by_user(db, user.id) == []


class TestChatWithTutor:

    def test_stores_both_messages(self, db, user, llm):
        llm.chat_responses = ["A derivative is a rate of change."]
        user_message, ai_message = chat_with_tutor(db, StudyAssistant(llm=llm), user.id, "What is a derivative?")

        assert user_message.is_user_message is True
        assert ai_message.is_user_message is False
        assert ai_message.content == "A derivative is a rate of change."
        assert [m.content for m in get_chat_messages_by_user(db, user.id)] == [
            "What is a derivative?",
            "A derivative is a rate of change."
        ]

    def test_history_excludes_current_question(self, db, user, llm):
        llm.chat_responses = ["first answer", "second answer"]
        assistant = StudyAssistant(llm=llm)
        chat_with_tutor(db, assistant, user.id, "first question")
        chat_with_tutor(db, assistant, user.id, "second question")

        call = llm.send_calls[1]
        assert call["prompt"] == "second question"
        assert [(t.content, t.is_user_message) for t in call["history"]] == [
            ("first question", True),
            ("first answer", False)
        ]

    def test_reference_content_not_in_history(self, db, user, llm):
        llm.chat_responses = ["answer"]
        chat_with_tutor(db, StudyAssistant(llm=llm), user.id, "Explain", reference_content="Lecture 3 notes")

        call = llm.send_calls[0]
        assert all("Lecture 3 notes" not in t.content for t in call["history"])
        assert "Reference content: Lecture 3 notes" in call["system_messages"]
        assert all("Lecture 3 notes" not in m.content for m in get_chat_messages_by_user(db, user.id))

    def test_failure_keeps_user_message(self, db, user, llm):
        llm.error = ConnectionError("down")
        with pytest.raises(GenerationError):
            chat_with_tutor(db, StudyAssistant(llm=llm), user.id, "Hello?")

        messages = get_chat_messages_by_user(db, user.id)
        assert [m.content for m in messages] == ["Hello?"]


class TestDefaultPlanWindow:

    def test_two_weeks(self):
        start, end = default_plan_window(date(2026, 10, 17))
        assert start == date(2026, 10, 17)
        assert end == date(2026, 10, 30)
