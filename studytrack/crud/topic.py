from sqlalchemy import func
from sqlalchemy.orm import Session
from studytrack.models import Subject, Unit, Topic
from studytrack.schemas import TopicCreate, TopicContent, ParsedSyllabus
from studytrack.spaced_repetition import ReviewScheduler
from studytrack.crud.subject import update_subject_progress
from studytrack.logging_config import logger
from typing import List, Optional

def create_topic(db: Session, topic: TopicCreate) -> Topic:
    """Add an unscheduled topic to a unit"""
    db_topic = Topic(
        **topic.model_dump(),
        review_count=0,
        next_review=None,
        required_reviews=ReviewScheduler.required_reviews(topic.difficulty)
    )
    db.add(db_topic)
    db.commit()
    db.refresh(db_topic)
    return db_topic

def get_topic(db: Session, topic_id: int) -> Optional[Topic]:
    """Get topic by ID"""
    return db.query(Topic).filter(Topic.id == topic_id).first()

def get_topics(db: Session) -> List[Topic]:
    """Get every topic"""
    return db.query(Topic).order_by(Topic.id).all()

def get_topics_for_unit(db: Session, unit_id: int) -> List[Topic]:
    """Get topics of a unit in display order"""
    return db.query(Topic).filter(
        Topic.unit_id == unit_id
    ).order_by(Topic.sort_order, Topic.id).all()

def get_topics_for_subject(db: Session, subject_id: int) -> List[Topic]:
    """Get all topics under a subject"""
    return db.query(Topic).join(Unit).filter(
        Unit.subject_id == subject_id
    ).order_by(Unit.sort_order, Topic.sort_order, Topic.id).all()

def update_topic(db: Session, topic_id: int, topic_data: dict) -> Optional[Topic]:
    """Update topic fields.

    A difficulty change re-derives the cached required_reviews.
    """
    db_topic = get_topic(db, topic_id)
    if db_topic:
        if "difficulty" in topic_data:
            topic_data = {
                **topic_data,
                "required_reviews": ReviewScheduler.required_reviews(topic_data["difficulty"])
            }
        for key, value in topic_data.items():
            setattr(db_topic, key, value)
        db.commit()
        db.refresh(db_topic)
    return db_topic

def delete_topic(db: Session, topic_id: int) -> bool:
    """Delete a topic"""
    db_topic = get_topic(db, topic_id)
    if not db_topic:
        return False
    subject_id = db_topic.unit.subject_id
    db.delete(db_topic)
    db.commit()
    update_subject_progress(db, subject_id)
    return True

def set_topic_completed(db: Session, topic_id: int, completed: bool = True) -> Optional[Topic]:
    """Mark a topic studied (or not) and refresh its subject's progress"""
    db_topic = get_topic(db, topic_id)
    if not db_topic:
        return None
    db_topic.is_completed = completed
    db.commit()
    update_subject_progress(db, db_topic.unit.subject_id)
    db.refresh(db_topic)
    return db_topic

def save_topic_content(db: Session, topic_id: int, content: TopicContent) -> Optional[Topic]:
    """Store AI-generated summary and quiz on a topic"""
    return update_topic(db, topic_id, {
        "summary": content.summary,
        "quiz": [q.model_dump() for q in content.quiz]
    })

def import_syllabus(db: Session, syllabus: ParsedSyllabus) -> List[Subject]:
    """Persist a parsed Subject -> Unit -> Topic tree.

    Subjects are matched by name (case-insensitive) so re-importing a
    syllabus extends existing subjects instead of duplicating them.
    """
    imported = []
    topic_count = 0
    
    for parsed_subject in syllabus.subjects:
        db_subject = db.query(Subject).filter(
            func.lower(Subject.name) == parsed_subject.name.lower()
        ).first()
        if not db_subject:
            db_subject = Subject(name=parsed_subject.name, color=parsed_subject.color)
            db.add(db_subject)
            db.flush()
        
        for unit_order, parsed_unit in enumerate(parsed_subject.units):
            db_unit = Unit(subject_id=db_subject.id, name=parsed_unit.name, sort_order=unit_order)
            db.add(db_unit)
            db.flush()
            
            for topic_order, parsed_topic in enumerate(parsed_unit.topics):
                db.add(Topic(
                    unit_id=db_unit.id,
                    name=parsed_topic.name,
                    sort_order=topic_order,
                    difficulty=parsed_topic.difficulty,
                    required_reviews=ReviewScheduler.required_reviews(parsed_topic.difficulty),
                    revision_interval_days=parsed_topic.revision_interval_days,
                    review_count=0,
                    next_review=None
                ))
                topic_count += 1
        
        imported.append(db_subject)
    
    db.commit()
    for db_subject in imported:
        update_subject_progress(db, db_subject.id)
    
    logger.info("syllabus_imported", subjects=len(imported), topics=topic_count)
    return imported
