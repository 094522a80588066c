from studyhub.crud.user import create_user, get_user, get_user_by_username
from studyhub.crud.syllabus import (
    create_syllabus,
    get_syllabus,
    get_syllabi_by_user,
    update_syllabus,
    delete_syllabus
)
from studyhub.crud.study_plan import (
    create_study_plan,
    get_study_plan,
    get_study_plans_by_user,
    delete_study_plan,
    create_study_session,
    get_study_session,
    get_study_sessions_by_plan_id,
    update_study_session
)
from studyhub.crud.summary import create_summary, get_summary, get_summaries_by_user, delete_summary
from studyhub.crud.task import create_task, get_task, get_tasks_by_user, update_task, delete_task
from studyhub.crud.focus_session import (
    create_focus_session,
    get_focus_session,
    get_focus_sessions_by_user,
    update_focus_session
)
from studyhub.crud.chat_message import create_chat_message, get_chat_messages_by_user

__all__ = [
    "create_user",
    "get_user",
    "get_user_by_username",
    "create_syllabus",
    "get_syllabus",
    "get_syllabi_by_user",
    "update_syllabus",
    "delete_syllabus",
    "create_study_plan",
    "get_study_plan",
    "get_study_plans_by_user",
    "delete_study_plan",
    "create_study_session",
    "get_study_session",
    "get_study_sessions_by_plan_id",
    "update_study_session",
    "create_summary",
    "get_summary",
    "get_summaries_by_user",
    "delete_summary",
    "create_task",
    "get_task",
    "get_tasks_by_user",
    "update_task",
    "delete_task",
    "create_focus_session",
    "get_focus_session",
    "get_focus_sessions_by_user",
    "update_focus_session",
    "create_chat_message",
    "get_chat_messages_by_user",
]
