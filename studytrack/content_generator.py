from typing import List

from studytrack.ai_gateway import JsonGenerator
from studytrack.logging_config import logger
from studytrack.schemas import PracticeTest, TopicContent


class ContentGenerator(JsonGenerator):
    """Generate study notes, quizzes and practice tests for topics"""

    def generate_topic_content(self, subject_name: str, unit_name: str, topic_name: str) -> TopicContent:
        """
        Generate a summary and a 5-question quiz for a topic.

        Args:
            subject_name: Subject the topic belongs to
            unit_name: Unit the topic belongs to
            topic_name: Topic to generate material for

        Returns:
            TopicContent with summary and quiz
        """
        logger.info("generating_topic_content", subject=subject_name, topic=topic_name)
        return self._generate(
            TopicContent,
            """You are an expert educational content creator. Generate study materials for students.

For the given topic, create:
1. A concise summary (2-3 paragraphs max) that covers key concepts
2. 5 quiz questions with answers to test understanding

The summary should be:
- Clear and easy to understand
- Focused on the most important concepts
- Using bullet points where helpful
- Including key definitions

The quiz questions should:
- Cover different aspects of the topic
- Be of varying difficulty (easy, medium, hard)
- Have 4 options each and one clear, unambiguous answer
- Include an explanation for each answer""",
            """Generate educational content for this topic:

Subject: {subject}
Unit: {unit}
Topic: {topic}""",
            {"subject": subject_name, "unit": unit_name, "topic": topic_name}
        )

    def generate_test(self, subject_name: str, topic_names: List[str], question_count: int = 10) -> PracticeTest:
        """Generate a multiple-choice practice test across several topics"""
        logger.info("generating_test", subject=subject_name, topics=len(topic_names), questions=question_count)
        return self._generate(
            PracticeTest,
            """You are an expert test creator. Generate MCQ questions for students.

Guidelines:
- Mix difficulty levels (30% easy, 50% medium, 20% hard)
- Make questions clear and unambiguous
- All 4 options should be plausible
- Explanations should be helpful for learning""",
            "Generate {count} MCQ questions for {subject} covering these topics: {topics}",
            {"count": question_count, "subject": subject_name, "topics": ", ".join(topic_names)}
        )
