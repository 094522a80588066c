from pydantic import ValidationError
from typing import List, Optional, Sequence
from datetime import date
import logging

from studyhub.json_recovery import JsonRecoveryError, recover_json
from studyhub.llm import get_llm_client
from studyhub.schemas import (
    ChatTurn,
    GeneratedStudyPlan,
    ParsedSyllabusContent,
    StudyPreferences,
    SummaryFormat
)

logger = logging.getLogger(__name__)

JSON_ONLY_INSTRUCTION = "Important: Format your entire response as valid JSON with no extra text before or after it."

PLAN_SYSTEM_PROMPT = (
    "You are an expert educational planner. Create a detailed study plan based on the syllabus content, "
    "exam dates, and user preferences. Break down the material into logical study sessions with specific "
    "topics, durations, and dates."
)

SYLLABUS_SYSTEM_PROMPT = (
    "You are an expert at analyzing and structuring educational content. "
    "Extract key information from a syllabus into a structured format."
)

SUMMARY_SYSTEM_PROMPT = (
    "You are an educational content summarizer. Create concise summaries that retain "
    "key information and concepts. Format as {format_label}."
)

TUTOR_SYSTEM_PROMPT = (
    "You are an educational AI Tutor specializing in answering student questions on academic subjects. "
    "Provide helpful, clear explanations that help the student understand concepts deeply."
)

TUTOR_REFERENCE_HINT = "Use the provided reference content to provide context-aware answers."

EMPTY_SUMMARY = "No summary generated"
EMPTY_TUTOR_REPLY = "I don't have an answer for that question."


class GenerationError(RuntimeError):
    """Raised when the model call behind a generator fails"""
    pass


def fallback_syllabus() -> ParsedSyllabusContent:
    return ParsedSyllabusContent(
        course_name="Untitled Course",
        instructor="Unknown",
        topics=[{"name": "General Topics", "description": "Extracted from syllabus"}],
        exam_dates=[]
    )


def fallback_study_plan() -> GeneratedStudyPlan:
    """Single 60 minute review session dated today"""
    return GeneratedStudyPlan(
        title="Study Plan",
        description="Generated study plan based on your syllabus",
        sessions=[
            {
                "title": "Review Session",
                "description": "Review key topics from syllabus",
                "date": date.today(),
                "duration": 60
            }
        ]
    )


class StudyAssistant:
    """
    AI features of the app: syllabus parsing, plan generation,
    summarization and tutoring.

    Structured outputs (syllabus, plan) fall back to a minimal valid value when
    the model text cannot be recovered. Prose outputs have nothing to fall back
    to, so model failures surface as GenerationError.
    """

    def __init__(self, llm=None):
        self.llm = llm or get_llm_client()

    # ---------------------------------------------------------------
    # Syllabus extraction
    # ---------------------------------------------------------------

    def parse_syllabus(self, content: str) -> ParsedSyllabusContent:
        """Extract course name, instructor, topics and exam dates from syllabus text"""
        prompt = self._build_syllabus_prompt(content)
        try:
            text = self.llm.generate(prompt, system=SYLLABUS_SYSTEM_PROMPT, json_mode=True)
        except Exception as e:
            logger.error(f"Error parsing syllabus: {e}")
            raise GenerationError(f"Failed to parse syllabus: {e}") from e

        logger.debug(f"Raw AI response for syllabus parsing: {text[:200]}...")

        try:
            return ParsedSyllabusContent.model_validate(recover_json(text))
        except (JsonRecoveryError, ValidationError) as e:
            logger.warning(f"Error parsing syllabus JSON, using fallback: {e}")
            return fallback_syllabus()

    def _build_syllabus_prompt(self, content: str) -> str:
        return f"""Extract the following information from this syllabus content:

{content}

Please respond with a JSON object with the following structure:
{{
  "courseName": "Name of the course",
  "instructor": "Name of the instructor",
  "topics": [
    {{
      "name": "Topic name",
      "description": "Topic description"
    }}
  ],
  "examDates": [
    {{
      "name": "Exam name",
      "date": "YYYY-MM-DD"
    }}
  ]
}}

{JSON_ONLY_INSTRUCTION}"""

    # ---------------------------------------------------------------
    # Study plan generation
    # ---------------------------------------------------------------

    def generate_study_plan(
        self,
        syllabus_content: str,
        exam_dates: Optional[Sequence[str]],
        preferences: StudyPreferences
    ) -> GeneratedStudyPlan:
        """
        Generate a study plan for the preferred date window.

        Args:
            syllabus_content: Raw syllabus text
            exam_dates: Exam dates as YYYY-MM-DD strings, possibly empty
            preferences: Date window and optional study habits

        Returns:
            GeneratedStudyPlan; the single-session fallback plan when the
            model output cannot be used
        """
        prompt = self._build_plan_prompt(syllabus_content, list(exam_dates or []), preferences)
        try:
            text = self.llm.generate(prompt, system=PLAN_SYSTEM_PROMPT, json_mode=True)
        except Exception as e:
            logger.error(f"Error generating study plan: {e}")
            raise GenerationError(f"Failed to generate study plan: {e}") from e

        logger.debug(f"Raw AI response: {text}")

        try:
            return GeneratedStudyPlan.model_validate(recover_json(text))
        except (JsonRecoveryError, ValidationError) as e:
            logger.warning(f"Error parsing study plan JSON, using fallback: {e}")
            return fallback_study_plan()

    def _build_plan_prompt(
        self,
        syllabus_content: str,
        exam_dates: List[str],
        preferences: StudyPreferences
    ) -> str:
        hours = f"{preferences.hours_per_day:g}" if preferences.hours_per_day else "Flexible"
        times = ", ".join(preferences.preferred_study_times or []) or "Not specified"
        excluded = ", ".join(preferences.excluded_days or []) or "None"

        return f"""Generate a study plan with the following information:

Syllabus Content: {syllabus_content}

Exam Dates: {", ".join(exam_dates) or "None provided"}

User Preferences:
- Start Date: {preferences.start_date.isoformat()}
- End Date: {preferences.end_date.isoformat()}
- Hours Per Day: {hours}
- Preferred Study Times: {times}
- Excluded Days: {excluded}

Please respond with a JSON object with the following structure:
{{
  "title": "Title of the study plan",
  "description": "Brief description of the plan",
  "sessions": [
    {{
      "title": "Session title",
      "description": "What will be studied",
      "date": "YYYY-MM-DD",
      "duration": 60
    }}
  ]
}}

Session durations are in minutes.

{JSON_ONLY_INSTRUCTION}"""

    # ---------------------------------------------------------------
    # Summaries
    # ---------------------------------------------------------------

    def summarize_content(
        self,
        content: str,
        format: SummaryFormat = SummaryFormat.bullet_points
    ) -> str:
        """Summarize content into bullet points or short paragraphs"""
        format_label = _format_label(format)
        prompt = f"""Summarize the following educational content:

{content}

Format as {format_label}."""
        try:
            text = self.llm.generate(prompt, system=SUMMARY_SYSTEM_PROMPT.format(format_label=format_label))
        except Exception as e:
            logger.error(f"Error summarizing content: {e}")
            raise GenerationError(f"Failed to summarize content: {e}") from e

        return text or EMPTY_SUMMARY

    # ---------------------------------------------------------------
    # Tutor
    # ---------------------------------------------------------------

    def get_tutor_response(
        self,
        question: str,
        previous_messages: Optional[Sequence[ChatTurn]] = None,
        reference_content: Optional[str] = None
    ) -> str:
        """
        Answer a student question in the context of the prior conversation.

        Reference content goes in its own system message ahead of the history;
        it is never merged into the question or the history turns.
        """
        history = [ChatTurn.model_validate(turn) for turn in previous_messages or []]
        system_messages = self._build_tutor_system_messages(reference_content)
        try:
            text = self.llm.send_message(question, history, system_messages=system_messages)
        except Exception as e:
            logger.error(f"Error getting AI tutor response: {e}")
            raise GenerationError(f"Failed to get a response from the AI tutor: {e}") from e

        return text or EMPTY_TUTOR_REPLY

    def _build_tutor_system_messages(self, reference_content: Optional[str]) -> List[str]:
        if not reference_content:
            return [TUTOR_SYSTEM_PROMPT]
        return [
            f"{TUTOR_SYSTEM_PROMPT}\n{TUTOR_REFERENCE_HINT}",
            f"Reference content: {reference_content}"
        ]


def _format_label(format: SummaryFormat) -> str:
    return "bullet points" if SummaryFormat(format) == SummaryFormat.bullet_points else "short paragraphs"
