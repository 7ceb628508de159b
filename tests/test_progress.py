from datetime import timedelta

from studytrack.progress import (
    build_dashboard,
    build_parent_report,
    confidence_breakdown,
    overall_progress,
    study_streak,
    weekly_activity,
    weekly_test_stats,
)


def topic(is_completed=False, last_reviewed=None, next_review=None, review_count=0, difficulty="medium", confidence=None):
    return {
        "is_completed": is_completed,
        "last_reviewed": last_reviewed,
        "next_review": next_review,
        "review_count": review_count,
        "difficulty": difficulty,
        "confidence": confidence,
    }


def test_overall_progress():
    assert overall_progress([]) == 0
    assert overall_progress([topic(True), topic(False), topic(True)]) == 67


def test_weekly_activity_covers_last_seven_days(now):
    topics = [
        topic(is_completed=True, last_reviewed=now, review_count=1),
        topic(is_completed=False, last_reviewed=now - timedelta(days=2), review_count=2),
        topic(is_completed=True, last_reviewed=now - timedelta(days=9), review_count=1),
    ]
    activity = weekly_activity(topics, now=now)

    assert len(activity) == 7
    # 2026-03-10 is a Tuesday
    assert activity[-1].day == "Tue"
    assert (activity[-1].topics, activity[-1].reviews) == (1, 1)
    assert (activity[-3].topics, activity[-3].reviews) == (0, 1)
    assert sum(day.reviews for day in activity) == 2


def test_study_streak(now):
    days = [0, 1, 2, 4]
    topics = [topic(last_reviewed=now - timedelta(days=d)) for d in days]
    assert study_streak(topics, now=now) == 3


def test_study_streak_not_broken_by_quiet_today(now):
    topics = [topic(last_reviewed=now - timedelta(days=d)) for d in (1, 2)]
    assert study_streak(topics, now=now) == 2
    assert study_streak([], now=now) == 0


def test_confidence_breakdown():
    topics = [topic(confidence="low"), topic(confidence="high"), topic(confidence="high"), topic()]
    assert confidence_breakdown(topics) == {"low": 1, "medium": 0, "high": 2}


def test_dashboard_summary(now):
    subjects = [{"name": "Math", "color": "#3B82F6", "progress": 50}]
    topics = [
        topic(is_completed=True, next_review=None),
        topic(is_completed=True, next_review=now - timedelta(days=3), review_count=3, last_reviewed=now - timedelta(days=7)),
        topic(is_completed=False, next_review=now + timedelta(days=5), review_count=1),
        topic(is_completed=False, next_review=now + timedelta(hours=2)),
    ]

    summary = build_dashboard(subjects, topics, now=now)

    assert summary.total_subjects == 1
    assert summary.total_topics == 4
    assert summary.completed_topics == 2
    assert summary.overall_progress == 50
    assert summary.due_today == 3
    assert summary.urgent == 1
    assert summary.mastered == 1
    assert summary.show_revision_reminder is True


def test_no_reminder_when_nothing_due(now):
    summary = build_dashboard([], [topic(next_review=now + timedelta(days=2))], now=now)
    assert summary.due_today == 0
    assert summary.show_revision_reminder is False


def test_parent_report(now):
    subjects = [{"name": "Math", "color": "#10B981", "progress": 80}]
    topics = [
        topic(is_completed=True, last_reviewed=now - timedelta(days=1), review_count=2, confidence="high"),
        topic(is_completed=True, last_reviewed=now, review_count=0),
        topic(is_completed=True, last_reviewed=now - timedelta(days=10), review_count=1),
        topic(is_completed=False),
    ]

    report = build_parent_report(subjects, topics, now=now)

    assert report.topics_completed_this_week == 2
    assert report.reviews_this_week == 1
    assert report.study_streak == 2
    assert report.overall_progress == 75
    assert report.headline == "Excellent progress this week!"
    assert report.subjects[0].progress == 80
    assert report.confidence["high"] == 1


def test_weekly_test_stats(now):
    results = [
        {"score": 8, "total_questions": 10, "completed_at": now - timedelta(days=1)},
        {"score": 1, "total_questions": 2, "completed_at": now - timedelta(days=6)},
        {"score": 0, "total_questions": 10, "completed_at": now - timedelta(days=8)},
    ]
    assert weekly_test_stats(results, now=now) == (2, 65)
    assert weekly_test_stats([], now=now) == (0, 0)


def test_parent_report_includes_test_scores(now):
    results = [{"score": 3, "total_questions": 4, "completed_at": now}]

    report = build_parent_report([], [], now=now, test_results=results)

    assert report.tests_completed == 1
    assert report.average_test_score == 75
    assert build_parent_report([], [], now=now).tests_completed == 0
