from sqlalchemy.orm import Session
from datetime import date
import logging

from studyhub.crud.study_plan import create_study_plan, create_study_session
from studyhub.models import StudyPlan
from studyhub.schemas import GeneratedStudyPlan, StudyPlanCreate, StudySessionCreate

logger = logging.getLogger(__name__)


def materialize_study_plan(
    db: Session,
    user_id: int,
    generated_plan: GeneratedStudyPlan,
    start_date: date,
    end_date: date
) -> StudyPlan:
    """
    Persist a generated plan as one StudyPlan row plus one StudySession per
    generated session.

    The plan window is the caller's requested start/end dates; dates from the
    model only apply to individual sessions. Sessions are created in the order
    the generator returned them, all with completed=False.

    Each insert commits on its own. If a session insert fails, the plan and
    the sessions created before it stay in the database.

    Returns:
        The StudyPlan with its sessions loaded
    """
    plan = create_study_plan(db, StudyPlanCreate(
        user_id=user_id,
        title=generated_plan.title,
        description=generated_plan.description,
        start_date=start_date,
        end_date=end_date
    ))

    for session in generated_plan.sessions:
        create_study_session(db, StudySessionCreate(
            study_plan_id=plan.id,
            title=session.title,
            description=session.description,
            date=session.date,
            duration=session.duration,
            completed=False
        ))

    db.refresh(plan)
    logger.info(f"Created study plan {plan.id} with {len(plan.sessions)} sessions")
    return plan
