from studyhub.models.user import User
from studyhub.models.syllabus import Syllabus
from studyhub.models.study_plan import StudyPlan
from studyhub.models.study_session import StudySession
from studyhub.models.summary import Summary
from studyhub.models.task import Task
from studyhub.models.focus_session import FocusSession
from studyhub.models.chat_message import ChatMessage

__all__ = [
    "User",
    "Syllabus",
    "StudyPlan",
    "StudySession",
    "Summary",
    "Task",
    "FocusSession",
    "ChatMessage"
]
