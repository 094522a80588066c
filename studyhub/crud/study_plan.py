from sqlalchemy.orm import Session
from studyhub.models import StudyPlan, StudySession
from studyhub.schemas import StudyPlanCreate, StudySessionCreate
from typing import List, Optional

def create_study_plan(db: Session, plan: StudyPlanCreate) -> StudyPlan:
    """Create a study plan header"""
    db_plan = StudyPlan(**plan.model_dump())
    db.add(db_plan)
    db.commit()
    db.refresh(db_plan)
    return db_plan

def get_study_plan(db: Session, plan_id: int) -> Optional[StudyPlan]:
    """Get study plan by ID"""
    return db.query(StudyPlan).filter(StudyPlan.id == plan_id).first()

def get_study_plans_by_user(db: Session, user_id: int) -> List[StudyPlan]:
    """Get all study plans for a user, newest first"""
    return db.query(StudyPlan).filter(
        StudyPlan.user_id == user_id
    ).order_by(StudyPlan.created_at.desc(), StudyPlan.id.desc()).all()

def delete_study_plan(db: Session, plan_id: int) -> bool:
    """Delete a study plan together with its sessions"""
    db_plan = get_study_plan(db, plan_id)
    if not db_plan:
        return False
    db.delete(db_plan)
    db.commit()
    return True

def create_study_session(db: Session, session: StudySessionCreate) -> StudySession:
    """Create one session row of a study plan"""
    db_session = StudySession(**session.model_dump())
    db.add(db_session)
    db.commit()
    db.refresh(db_session)
    return db_session

def get_study_session(db: Session, session_id: int) -> Optional[StudySession]:
    """Get study session by ID"""
    return db.query(StudySession).filter(StudySession.id == session_id).first()

def get_study_sessions_by_plan_id(db: Session, plan_id: int) -> List[StudySession]:
    """Get the sessions of a plan in creation order"""
    return db.query(StudySession).filter(
        StudySession.study_plan_id == plan_id
    ).order_by(StudySession.id).all()

def update_study_session(db: Session, session_id: int, session_data: dict) -> Optional[StudySession]:
    """Update a study session (normally just the completed flag)"""
    db_session = get_study_session(db, session_id)
    if db_session:
        for key, value in session_data.items():
            setattr(db_session, key, value)
        db.commit()
        db.refresh(db_session)
    return db_session
