"""End-to-end flows used by the CLI: ingest, plan, summarize, chat"""

from sqlalchemy.orm import Session
from pydantic import ValidationError
from datetime import date, timedelta
from typing import List, Optional, Tuple
import logging

from studyhub.crud import (
    create_chat_message,
    create_summary,
    create_syllabus,
    get_chat_messages_by_user,
    get_syllabus
)
from studyhub.generators import StudyAssistant
from studyhub.materializer import materialize_study_plan
from studyhub.models import ChatMessage, StudyPlan, Summary, Syllabus
from studyhub.schemas import (
    ChatMessageCreate,
    ChatTurn,
    ParsedSyllabusContent,
    StudyPreferences,
    SummaryCreate,
    SummaryFormat,
    SyllabusCreate
)

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """Raised when a referenced record does not exist or belongs to another user"""
    pass


def upload_syllabus(
    db: Session,
    assistant: StudyAssistant,
    user_id: int,
    title: str,
    text: str
) -> Syllabus:
    """Parse syllabus text with the assistant and store it"""
    parsed = assistant.parse_syllabus(text)
    syllabus = create_syllabus(db, SyllabusCreate(
        user_id=user_id,
        title=title,
        content=text,
        course_name=parsed.course_name,
        parsed_content=parsed
    ))
    logger.info(f"Stored syllabus {syllabus.id} ({len(parsed.topics)} topics, {len(parsed.exam_dates)} exams)")
    return syllabus


def exam_dates_for(syllabus: Syllabus) -> List[str]:
    """Exam dates stored in a syllabus' parsed content, empty if unavailable"""
    if not isinstance(syllabus.parsed_content, dict):
        return []
    try:
        parsed = ParsedSyllabusContent.model_validate(syllabus.parsed_content)
    except ValidationError as e:
        logger.warning(f"Ignoring exam dates of syllabus {syllabus.id}, stored content is invalid: {e}")
        return []
    return [exam.date for exam in parsed.exam_dates]


def create_plan_from_syllabus(
    db: Session,
    assistant: StudyAssistant,
    user_id: int,
    syllabus_id: int,
    preferences: StudyPreferences
) -> StudyPlan:
    """
    Generate a study plan for a stored syllabus and persist it.

    Raises:
        NotFoundError: if the syllabus does not exist for this user
    """
    syllabus = get_syllabus(db, syllabus_id)
    if not syllabus or syllabus.user_id != user_id:
        raise NotFoundError(f"Syllabus {syllabus_id} not found")

    generated = assistant.generate_study_plan(
        syllabus.content,
        exam_dates_for(syllabus),
        preferences
    )
    return materialize_study_plan(
        db,
        user_id,
        generated,
        preferences.start_date,
        preferences.end_date
    )


def summarize_and_save(
    db: Session,
    assistant: StudyAssistant,
    user_id: int,
    content: str,
    title: Optional[str] = None,
    format: SummaryFormat = SummaryFormat.bullet_points
) -> Summary:
    """Summarize content and store the summary"""
    if not content or not content.strip():
        raise ValueError("No content or file provided")

    summary = assistant.summarize_content(content, format)
    return create_summary(db, SummaryCreate(
        user_id=user_id,
        title=title or "Untitled Summary",
        original_content=content,
        summary=summary
    ))


def chat_with_tutor(
    db: Session,
    assistant: StudyAssistant,
    user_id: int,
    content: str,
    reference_content: Optional[str] = None
) -> Tuple[ChatMessage, ChatMessage]:
    """
    Send a question to the tutor and store both sides of the exchange.

    History is read before the new question is stored so the question is
    sent once, as the final turn.

    Returns:
        (user_message, ai_message)
    """
    history = [
        ChatTurn(content=msg.content, is_user_message=msg.is_user_message)
        for msg in get_chat_messages_by_user(db, user_id)
    ]
    user_message = create_chat_message(db, ChatMessageCreate(
        user_id=user_id,
        content=content,
        is_user_message=True
    ))

    reply = assistant.get_tutor_response(content, history, reference_content)

    ai_message = create_chat_message(db, ChatMessageCreate(
        user_id=user_id,
        content=reply,
        is_user_message=False
    ))
    return user_message, ai_message


def default_plan_window(today: Optional[date] = None) -> Tuple[date, date]:
    """Two weeks starting today"""
    start = today or date.today()
    return start, start + timedelta(days=13)
