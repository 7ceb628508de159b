from sqlalchemy.orm import Session
from studytrack.models import StudyTask
from studytrack.schemas import StudyTaskCreate
from studytrack.logging_config import logger
from datetime import date
from typing import List, Optional

def create_task(db: Session, task: StudyTaskCreate) -> StudyTask:
    """Schedule a study task"""
    db_task = StudyTask(**task.model_dump())
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task

def get_task(db: Session, task_id: int) -> Optional[StudyTask]:
    """Get task by ID"""
    return db.query(StudyTask).filter(StudyTask.id == task_id).first()

def get_tasks(db: Session, scheduled_date: Optional[date] = None) -> List[StudyTask]:
    """Get tasks in date order, optionally for a single day"""
    query = db.query(StudyTask)
    if scheduled_date is not None:
        query = query.filter(StudyTask.scheduled_date == scheduled_date)
    return query.order_by(StudyTask.scheduled_date, StudyTask.id).all()

def set_task_completed(db: Session, task_id: int, completed: bool = True) -> Optional[StudyTask]:
    """Tick a task off (or reopen it)"""
    db_task = get_task(db, task_id)
    if db_task:
        db_task.is_completed = completed
        db.commit()
        db.refresh(db_task)
    return db_task

def delete_task(db: Session, task_id: int) -> bool:
    """Delete a task"""
    db_task = get_task(db, task_id)
    if not db_task:
        return False
    db.delete(db_task)
    db.commit()
    return True

def carry_over_tasks(db: Session, today: Optional[date] = None) -> List[StudyTask]:
    """
    Move unfinished tasks from earlier days to today.
    
    ``carried_over_from`` keeps the first date a task was scheduled for, so a
    task carried over several times still shows where it started.
    """
    today = today or date.today()
    overdue = db.query(StudyTask).filter(
        StudyTask.is_completed.is_(False),
        StudyTask.scheduled_date < today
    ).all()
    
    for task in overdue:
        if task.carried_over_from is None:
            task.carried_over_from = task.scheduled_date
        task.scheduled_date = today
    
    if overdue:
        db.commit()
        logger.info("tasks_carried_over", count=len(overdue), scheduled_date=today.isoformat())
    return overdue
