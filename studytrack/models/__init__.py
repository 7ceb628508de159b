from studytrack.models.subject import Subject
from studytrack.models.unit import Unit
from studytrack.models.topic import Topic
from studytrack.models.practice_test import StudyTest, StudyTestQuestion, StudyTestResult
from studytrack.models.study_task import StudyTask

__all__ = [
    "Subject",
    "Unit",
    "Topic",
    "StudyTest",
    "StudyTestQuestion",
    "StudyTestResult",
    "StudyTask"
]
