from sqlalchemy.orm import Session
from studyhub.models import Task
from studyhub.schemas import TaskCreate
from typing import List, Optional

def create_task(db: Session, task: TaskCreate) -> Task:
    """Create a task"""
    db_task = Task(**task.model_dump(mode="python"))
    db_task.priority = task.priority.value
    db_task.category = task.category.value
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task

def get_task(db: Session, task_id: int) -> Optional[Task]:
    """Get task by ID"""
    return db.query(Task).filter(Task.id == task_id).first()

def get_tasks_by_user(db: Session, user_id: int, include_completed: bool = True) -> List[Task]:
    """Get tasks for a user, newest first"""
    query = db.query(Task).filter(Task.user_id == user_id)
    if not include_completed:
        query = query.filter(Task.completed.is_(False))
    return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

def update_task(db: Session, task_id: int, task_data: dict) -> Optional[Task]:
    """Update task fields"""
    db_task = get_task(db, task_id)
    if db_task:
        for key, value in task_data.items():
            setattr(db_task, key, value)
        db.commit()
        db.refresh(db_task)
    return db_task

def delete_task(db: Session, task_id: int) -> bool:
    """Delete a task; linked focus sessions keep running with no task"""
    db_task = get_task(db, task_id)
    if not db_task:
        return False
    db.delete(db_task)
    db.commit()
    return True
