"""Dashboard and parent report statistics computed from topic records"""

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from studytrack.schemas import DailyActivity, DashboardSummary, ParentReport, SubjectProgress
from studytrack.spaced_repetition import ReviewScheduler, get_field

STREAK_WINDOW_DAYS = 30


def overall_progress(topics: List[Any]) -> int:
    """Percentage of topics marked completed"""
    if not topics:
        return 0
    completed = sum(1 for t in topics if get_field(t, "is_completed"))
    return round(completed / len(topics) * 100)


def _reviewed_on(topic: Any, day) -> bool:
    last_reviewed = get_field(topic, "last_reviewed")
    return last_reviewed is not None and last_reviewed.date() == day


def weekly_activity(topics: List[Any], now: Optional[datetime] = None) -> List[DailyActivity]:
    """Per-day activity for the last 7 days, oldest first"""
    now = now or datetime.now()
    activity = []
    for offset in range(6, -1, -1):
        day = (now - timedelta(days=offset)).date()
        reviewed = [t for t in topics if _reviewed_on(t, day)]
        activity.append(DailyActivity(
            day=day.strftime("%a"),
            topics=sum(1 for t in reviewed if get_field(t, "is_completed")),
            reviews=sum(1 for t in reviewed if (get_field(t, "review_count") or 0) > 0)
        ))
    return activity


def study_streak(topics: List[Any], now: Optional[datetime] = None) -> int:
    """Consecutive days with review activity, ending today or yesterday"""
    now = now or datetime.now()
    active_days = {
        get_field(t, "last_reviewed").date()
        for t in topics
        if get_field(t, "last_reviewed") is not None
    }

    streak = 0
    for offset in range(STREAK_WINDOW_DAYS):
        day = (now - timedelta(days=offset)).date()
        if day in active_days:
            streak += 1
        elif offset > 0:
            break
    return streak


def confidence_breakdown(topics: List[Any]) -> Dict[str, int]:
    counts = {"low": 0, "medium": 0, "high": 0}
    for topic in topics:
        level = get_field(topic, "confidence")
        if level in counts:
            counts[level] += 1
    return counts


def weekly_test_stats(results: Iterable[Any], now: Optional[datetime] = None) -> Tuple[int, int]:
    """Tests completed in the last 7 days and their average percentage score"""
    now = now or datetime.now()
    week_ago = now - timedelta(days=7)
    recent = [
        r for r in results
        if get_field(r, "completed_at") is not None
        and get_field(r, "completed_at") >= week_ago
        and get_field(r, "total_questions")
    ]
    if not recent:
        return 0, 0
    total = sum(get_field(r, "score") / get_field(r, "total_questions") * 100 for r in recent)
    return len(recent), round(total / len(recent))


def _headline(progress: int) -> str:
    if progress >= 75:
        return "Excellent progress this week!"
    if progress >= 50:
        return "Good progress! Keep it up!"
    if progress >= 25:
        return "Making steady progress"
    return "Getting started - every topic counts"


def build_dashboard(subjects: List[Any], topics: List[Any], now: Optional[datetime] = None) -> DashboardSummary:
    """Summary cards for the student dashboard"""
    now = now or datetime.now()
    due_today = ReviewScheduler.count_due_today(topics, now=now)

    return DashboardSummary(
        total_subjects=len(subjects),
        total_topics=len(topics),
        completed_topics=sum(1 for t in topics if get_field(t, "is_completed")),
        overall_progress=overall_progress(topics),
        due_today=due_today,
        urgent=ReviewScheduler.count_urgent(topics, now=now),
        mastered=sum(
            1 for t in topics
            if get_field(t, "is_completed")
            and ReviewScheduler.is_mastered(get_field(t, "review_count") or 0, get_field(t, "difficulty"))
        ),
        show_revision_reminder=due_today > 0,
        weekly_activity=weekly_activity(topics, now=now)
    )


def build_parent_report(
    subjects: List[Any],
    topics: List[Any],
    now: Optional[datetime] = None,
    test_results: Iterable[Any] = ()
) -> ParentReport:
    """Read-only progress report for parents"""
    now = now or datetime.now()
    tests_completed, average_test_score = weekly_test_stats(test_results, now=now)
    week_ago = now - timedelta(days=7)
    this_week = [
        t for t in topics
        if get_field(t, "last_reviewed") is not None and get_field(t, "last_reviewed") >= week_ago
    ]
    progress = overall_progress(topics)

    return ParentReport(
        topics_completed_this_week=sum(1 for t in this_week if get_field(t, "is_completed")),
        reviews_this_week=sum(1 for t in this_week if (get_field(t, "review_count") or 0) > 0),
        study_streak=study_streak(topics, now=now),
        overall_progress=progress,
        completed_topics=sum(1 for t in topics if get_field(t, "is_completed")),
        total_topics=len(topics),
        due_today=ReviewScheduler.count_due_today(topics, now=now),
        urgent=ReviewScheduler.count_urgent(topics, now=now),
        subjects=[
            SubjectProgress(
                name=get_field(s, "name"),
                color=get_field(s, "color") or "#3B82F6",
                progress=get_field(s, "progress") or 0
            )
            for s in subjects
        ],
        tests_completed=tests_completed,
        average_test_score=average_test_score,
        confidence=confidence_breakdown(topics),
        weekly_activity=weekly_activity(topics, now=now),
        headline=_headline(progress)
    )
