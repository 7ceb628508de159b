from sqlalchemy.orm import Session
from studytrack.models import Subject, Unit, Topic
from studytrack.schemas import ReviewResult
from studytrack.spaced_repetition import ReviewScheduler
from studytrack.errors import TopicNotFoundError
from studytrack.logging_config import logger
from datetime import datetime
from typing import List, Optional, Tuple

def record_review(
    db: Session,
    topic_id: int,
    difficulty: str,
    confidence: Optional[str] = None,
    now: Optional[datetime] = None
) -> ReviewResult:
    """
    Record a completed review session and reschedule the topic.
    
    Args:
        difficulty: Difficulty rated by the student for this session
        confidence: Optional self-reported confidence (low/medium/high)
        now: Review time, defaults to the current local time
    
    Returns:
        ReviewResult with the new schedule. ``newly_mastered`` is True only
        when this review pushed the topic over its mastery threshold.
    """
    topic = db.query(Topic).filter(Topic.id == topic_id).first()
    if not topic:
        raise TopicNotFoundError(topic_id)
    
    now = now or datetime.now()
    was_mastered = ReviewScheduler.is_mastered(topic.review_count, topic.difficulty)
    
    fields = ReviewScheduler.apply_review_outcome(topic, difficulty, confidence, now=now)
    for key, value in fields.items():
        setattr(topic, key, value)
    db.commit()
    db.refresh(topic)
    
    mastered = ReviewScheduler.is_mastered(topic.review_count, topic.difficulty)
    logger.info(
        "review_recorded",
        topic_id=topic.id,
        difficulty=topic.difficulty,
        review_count=topic.review_count,
        next_review=topic.next_review.isoformat()
    )
    if mastered and not was_mastered:
        logger.info("topic_mastered", topic_id=topic.id, review_count=topic.review_count)
    
    return ReviewResult(
        topic_id=topic.id,
        difficulty=topic.difficulty,
        review_count=topic.review_count,
        required_reviews=topic.required_reviews,
        next_review=topic.next_review,
        mastered=mastered,
        newly_mastered=mastered and not was_mastered
    )

def get_review_topics(db: Session) -> List[Tuple[Topic, str, str]]:
    """Get (topic, subject name, unit name) rows for the review page.

    Only studied topics enter the review cycle.
    """
    return db.query(Topic, Subject.name, Unit.name).join(
        Unit, Topic.unit_id == Unit.id
    ).join(
        Subject, Unit.subject_id == Subject.id
    ).filter(
        Topic.is_completed.is_(True)
    ).order_by(Subject.name, Unit.sort_order, Topic.sort_order, Topic.id).all()
