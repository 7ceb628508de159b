from langchain_ollama import ChatOllama
from langchain_anthropic import ChatAnthropic
from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.output_parsers import JsonOutputParser
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, ValidationError
from typing import Any, Dict, List, Type, TypeVar, Union

from studytrack.config import settings
from studytrack.errors import AIConfigurationError, AIResponseError
from studytrack.logging_config import logger
from studytrack.schemas import ChatMessageIn

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def get_llm(json_mode: bool = False, temperature: float = 0.0) -> BaseChatModel:
    """Factory function to return the chat model selected in config"""
    if settings.ai_provider.lower() == "claude":
        if not settings.claude_api_key:
            raise AIConfigurationError("CLAUDE_API_KEY not set in environment variables")
        return ChatAnthropic(
            model=settings.claude_model,
            api_key=settings.claude_api_key,
            temperature=temperature
        )

    extra = {"format": "json"} if json_mode else {}
    return ChatOllama(
        model=settings.ollama_model,
        base_url=settings.ollama_base_url,
        temperature=temperature,
        **extra
    )


def to_langchain_messages(messages: List[Union[ChatMessageIn, Dict[str, Any]]]) -> List[BaseMessage]:
    """Convert role-tagged chat messages to LangChain messages.

    Messages carrying an image reference become multimodal content.
    """
    converted = []
    for raw in messages:
        msg = raw if isinstance(raw, ChatMessageIn) else ChatMessageIn(**raw)

        if msg.image_url:
            content = [
                {"type": "text", "text": msg.content or "Please analyze this image."},
                {"type": "image_url", "image_url": {"url": msg.image_url}},
            ]
        else:
            content = msg.content

        if msg.role == "assistant":
            converted.append(AIMessage(content=content))
        else:
            converted.append(HumanMessage(content=content))
    return converted


class JsonGenerator:
    """Base class for AI requests answered with structured JSON"""

    def __init__(self, llm: BaseChatModel = None):
        self._llm = llm

    @property
    def llm(self) -> BaseChatModel:
        # Created on first use so non-AI paths work without a provider
        if self._llm is None:
            self._llm = get_llm(json_mode=True)
        return self._llm

    def _generate(
        self,
        schema: Type[SchemaT],
        system_prompt: str,
        human_prompt: str,
        variables: Dict[str, Any]
    ) -> SchemaT:
        """Run prompt | llm | parser and validate the result against schema"""
        parser = JsonOutputParser(pydantic_object=schema)
        prompt = ChatPromptTemplate.from_messages([
            ("system", system_prompt),
            ("human", human_prompt + "\n\n{format_instructions}")
        ])
        chain = prompt | self.llm | parser

        try:
            result = chain.invoke({
                **variables,
                "format_instructions": parser.get_format_instructions()
            })
            return schema.model_validate(result)
        except (OutputParserException, ValidationError) as e:
            logger.warning("ai_response_invalid", generator=self.__class__.__name__, error=str(e))
            raise AIResponseError(f"Invalid response format from AI: {e}") from e
