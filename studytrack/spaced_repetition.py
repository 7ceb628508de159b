from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

from studytrack.errors import InvalidConfidenceError, InvalidDifficultyError

DIFFICULTIES = ("easy", "medium", "hard")
CONFIDENCE_LEVELS = ("low", "medium", "high")

# Completed reviews needed before a topic counts as mastered
REQUIRED_REVIEWS: Dict[str, int] = {
    "easy": 2,
    "medium": 3,
    "hard": 4,
}

# Review intervals in days; index 0 is the gap after the first review
INTERVALS: Dict[str, Tuple[float, ...]] = {
    "easy": (1, 3, 7, 14, 30, 60, 120),
    "medium": (1, 2, 4, 8, 16, 32, 64),
    "hard": (0.5, 1, 2, 4, 8, 16, 32),
}

# Single-topic due checks surface reviews this far ahead of schedule
DUE_LOOKAHEAD = timedelta(hours=1)
URGENT_AFTER = timedelta(days=1)


class ReviewBuckets(NamedTuple):
    """Topics partitioned for the review page"""
    due: List[Any]
    upcoming: List[Any]
    mastered: List[Any]


class ReviewStatus(NamedTuple):
    """Display label for a topic's next review"""
    text: str
    urgent: bool
    overdue: bool


def get_field(topic: Any, name: str) -> Any:
    """Read a field from an ORM object or a plain mapping"""
    if isinstance(topic, Mapping):
        return topic.get(name)
    return getattr(topic, name, None)


def _check_difficulty(difficulty: str) -> str:
    if difficulty not in REQUIRED_REVIEWS:
        raise InvalidDifficultyError(difficulty)
    return difficulty


class ReviewScheduler:
    """
    Difficulty-tiered spaced repetition scheduling for study topics.

    Pure functions over a topic's review metadata: no I/O and no mutation.
    Time-dependent methods accept ``now`` so callers (and tests) can pin the
    clock; when omitted the local clock is read once per call.

    Three notions of "due" coexist:
      - is_due: per topic, with a one hour look-ahead
      - count_due_today: dashboard count, anything before tomorrow 00:00
      - classify: review list, next_review at or before now
    """

    @staticmethod
    def required_reviews(difficulty: str) -> int:
        """Number of completed reviews needed to master a topic"""
        return REQUIRED_REVIEWS[_check_difficulty(difficulty)]

    @staticmethod
    def review_intervals(difficulty: str) -> Tuple[float, ...]:
        """Interval sequence (days) for a difficulty, shortest first"""
        return INTERVALS[_check_difficulty(difficulty)]

    @staticmethod
    def calculate_next_review(
        review_count: int,
        difficulty: str,
        custom_interval_days: Optional[float] = None,
        now: Optional[datetime] = None
    ) -> datetime:
        """
        Calculate when a topic should next be reviewed.

        Args:
            review_count: Reviews already completed before this scheduling
            difficulty: "easy", "medium" or "hard"
            custom_interval_days: Optional initial cadence, honored only when
                review_count is 0. Non-positive values are ignored.
            now: Reference time (defaults to the current local time)

        Returns:
            Absolute timestamp strictly after ``now``
        """
        intervals = ReviewScheduler.review_intervals(difficulty)
        now = now or datetime.now()

        if custom_interval_days and custom_interval_days > 0 and review_count == 0:
            return now + timedelta(days=custom_interval_days)

        # Past the end of the table the longest interval repeats
        interval = intervals[min(review_count, len(intervals) - 1)]

        if interval < 1:
            return now + timedelta(hours=interval * 24)

        return now + timedelta(days=interval)

    @staticmethod
    def is_due(next_review: Optional[datetime], now: Optional[datetime] = None) -> bool:
        """Check if a topic is due, including reviews within the next hour"""
        if next_review is None:
            return True
        now = now or datetime.now()
        return next_review <= now + DUE_LOOKAHEAD

    @staticmethod
    def is_mastered(review_count: int, difficulty: str) -> bool:
        """Mastery is recomputed from the current difficulty, never cached"""
        return review_count >= ReviewScheduler.required_reviews(difficulty)

    @staticmethod
    def count_due_today(topics: Iterable[Any], now: Optional[datetime] = None) -> int:
        """Count topics unscheduled or due before the start of tomorrow"""
        now = now or datetime.now()
        tomorrow = now.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)

        count = 0
        for topic in topics:
            next_review = get_field(topic, "next_review")
            if next_review is None or next_review < tomorrow:
                count += 1
        return count

    @staticmethod
    def count_urgent(topics: Iterable[Any], now: Optional[datetime] = None) -> int:
        """Count topics more than one full day overdue"""
        now = now or datetime.now()

        count = 0
        for topic in topics:
            next_review = get_field(topic, "next_review")
            if next_review is not None and next_review + URGENT_AFTER < now:
                count += 1
        return count

    @staticmethod
    def classify(topics: Iterable[Any], now: Optional[datetime] = None) -> ReviewBuckets:
        """
        Partition topics into due / upcoming / mastered.

        Due and upcoming are disjoint. Mastered is independent of both: a
        mastered topic keeps cycling through reviews.
        Upcoming topics are ordered soonest first.
        """
        now = now or datetime.now()
        due, upcoming, mastered = [], [], []

        for topic in topics:
            next_review = get_field(topic, "next_review")
            if next_review is None or next_review <= now:
                due.append(topic)
            else:
                upcoming.append(topic)

            if ReviewScheduler.is_mastered(get_field(topic, "review_count") or 0, get_field(topic, "difficulty")):
                mastered.append(topic)

        upcoming.sort(key=lambda t: get_field(t, "next_review"))
        return ReviewBuckets(due=due, upcoming=upcoming, mastered=mastered)

    @staticmethod
    def apply_review_outcome(
        topic: Any,
        new_difficulty: str,
        confidence: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Compute the fields to persist after a completed review session.

        Args:
            topic: ORM Topic or mapping with review_count and
                revision_interval_days
            new_difficulty: Difficulty rated by the student for this session
            confidence: Optional "low", "medium" or "high"
            now: Reference time (defaults to the current local time)

        Returns:
            Dict of topic fields: difficulty, confidence, last_reviewed,
            next_review, review_count, required_reviews
        """
        required = ReviewScheduler.required_reviews(new_difficulty)
        if confidence is not None and confidence not in CONFIDENCE_LEVELS:
            raise InvalidConfidenceError(confidence)
        now = now or datetime.now()

        completed = get_field(topic, "review_count") or 0
        next_review = ReviewScheduler.calculate_next_review(
            completed,
            new_difficulty,
            get_field(topic, "revision_interval_days"),
            now=now
        )

        return {
            "difficulty": new_difficulty,
            "confidence": confidence,
            "last_reviewed": now,
            "next_review": next_review,
            "review_count": completed + 1,
            "required_reviews": required,
        }

    @staticmethod
    def time_until_review(next_review: Optional[datetime], now: Optional[datetime] = None) -> ReviewStatus:
        """
        Human readable status for a topic's next review.

        Future reviews report whole days remaining but never fewer than one,
        so a review 20 hours away on the next calendar day reads
        "1 day remaining" rather than "0 days remaining".
        """
        if next_review is None:
            return ReviewStatus("Ready now", urgent=True, overdue=False)

        now = now or datetime.now()
        if next_review <= now or next_review.date() == now.date():
            overdue = next_review < now and next_review.date() != now.date()
            return ReviewStatus("Due today", urgent=True, overdue=overdue)

        days = max((next_review - now).days, 1)
        if days == 1:
            return ReviewStatus("1 day remaining", urgent=False, overdue=False)
        return ReviewStatus(f"{days} days remaining", urgent=False, overdue=False)
