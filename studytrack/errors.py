"""Exception hierarchy shared by the scheduler, storage and AI layers."""


class StudyTrackError(Exception):
    """Base class for all application errors"""


class InvalidDifficultyError(StudyTrackError, ValueError):
    """Raised for a difficulty outside easy/medium/hard"""

    def __init__(self, difficulty):
        self.difficulty = difficulty
        super().__init__(f"Unknown difficulty: {difficulty!r}. Use 'easy', 'medium' or 'hard'")


class InvalidConfidenceError(StudyTrackError, ValueError):
    """Raised for a confidence level outside low/medium/high"""

    def __init__(self, confidence):
        self.confidence = confidence
        super().__init__(f"Unknown confidence level: {confidence!r}. Use 'low', 'medium' or 'high'")


class TopicNotFoundError(StudyTrackError, LookupError):
    def __init__(self, topic_id: int):
        self.topic_id = topic_id
        super().__init__(f"Topic ID {topic_id} not found")


class AIConfigurationError(StudyTrackError):
    """AI provider is selected but not usable (e.g. missing API key)"""


class AIResponseError(StudyTrackError):
    """AI provider returned output that could not be parsed"""


class PracticeTestNotFoundError(StudyTrackError, LookupError):
    def __init__(self, test_id: int):
        self.test_id = test_id
        super().__init__(f"Test ID {test_id} not found")


class InvalidAnswerError(StudyTrackError, ValueError):
    """Submitted answers do not fit the test's questions"""
