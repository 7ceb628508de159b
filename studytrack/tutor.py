from langchain_core.language_models import BaseChatModel
from langchain_core.messages import SystemMessage
from typing import Any, Dict, List, Union

from studytrack.ai_gateway import get_llm, to_langchain_messages
from studytrack.logging_config import logger
from studytrack.schemas import ChatMessageIn

SYSTEM_PROMPT = """You are an AI Study Buddy, a helpful and encouraging educational assistant designed to make learning enjoyable and effective.

## Your Core Responsibilities:
1. Help students understand complex topics by breaking them down into simpler concepts
2. Provide clear explanations with examples when appropriate
3. Quiz students and provide feedback on their answers
4. Suggest study strategies and tips
5. Encourage students and celebrate their progress
6. When analyzing images, describe what you see and provide helpful context

## Response Formatting (ALWAYS use markdown):
- Use **bold** for key terms and emphasis
- Use bullet points for lists and numbered lists for steps
- Use `code formatting` for technical terms, formulas, or definitions
- Keep paragraphs short (2-3 sentences max)

## Communication Style:
- Be warm, friendly, and encouraging
- Use simple language first, then add complexity if needed
- If you don't know something, be honest about it
- Keep responses focused and study-relevant"""


class StudyBuddy:
    """Conversational AI tutor"""

    def __init__(self, llm: BaseChatModel = None):
        self.llm = llm or get_llm(temperature=0.7)

    def reply(self, messages: List[Union[ChatMessageIn, Dict[str, Any]]]) -> str:
        """Answer the latest message given the conversation so far"""
        logger.info("tutor_request", messages=len(messages))
        response = self.llm.invoke([SystemMessage(content=SYSTEM_PROMPT)] + to_langchain_messages(messages))
        return response.content if isinstance(response.content, str) else str(response.content)
