from studytrack.crud.subject import (
    create_subject,
    get_subject,
    get_subjects,
    update_subject,
    delete_subject,
    update_subject_progress
)
from studytrack.crud.unit import create_unit, get_units, delete_unit
from studytrack.crud.topic import (
    create_topic,
    get_topic,
    get_topics,
    get_topics_for_unit,
    get_topics_for_subject,
    update_topic,
    delete_topic,
    set_topic_completed,
    save_topic_content,
    import_syllabus
)
from studytrack.crud.review import record_review, get_review_topics
from studytrack.crud.practice_test import (
    create_test,
    get_test,
    get_tests,
    delete_test,
    score_answers,
    submit_test_result,
    get_test_results
)
from studytrack.crud.study_task import (
    create_task,
    get_task,
    get_tasks,
    set_task_completed,
    delete_task,
    carry_over_tasks
)

__all__ = [
    "create_subject",
    "get_subject",
    "get_subjects",
    "update_subject",
    "delete_subject",
    "update_subject_progress",
    "create_unit",
    "get_units",
    "delete_unit",
    "create_topic",
    "get_topic",
    "get_topics",
    "get_topics_for_unit",
    "get_topics_for_subject",
    "update_topic",
    "delete_topic",
    "set_topic_completed",
    "save_topic_content",
    "import_syllabus",
    "record_review",
    "get_review_topics",
    "create_test",
    "get_test",
    "get_tests",
    "delete_test",
    "score_answers",
    "submit_test_result",
    "get_test_results",
    "create_task",
    "get_task",
    "get_tasks",
    "set_task_completed",
    "delete_task",
    "carry_over_tasks",
]
