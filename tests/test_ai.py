import json

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage

from studytrack import ai_gateway
from studytrack.ai_gateway import get_llm, to_langchain_messages
from studytrack.content_generator import ContentGenerator
from studytrack.errors import AIConfigurationError, AIResponseError
from studytrack.syllabus_parser import SyllabusParser
from studytrack.tutor import StudyBuddy


def fake_llm(*payloads):
    return FakeListChatModel(responses=[p if isinstance(p, str) else json.dumps(p) for p in payloads])


QUESTION = {
    "question": "What does a DFA accept?",
    "options": ["Regular languages", "All languages", "Nothing", "Context-free only"],
    "correct_index": 0,
    "explanation": "DFAs recognise exactly the regular languages.",
}


def test_generate_topic_content():
    generator = ContentGenerator(llm=fake_llm({"summary": "Automata are abstract machines.", "quiz": [QUESTION] * 5}))
    content = generator.generate_topic_content("Theory of Computation", "Unit I", "Finite automata")
    assert content.summary.startswith("Automata")
    assert len(content.quiz) == 5
    assert content.quiz[0].correct_index == 0


def test_generate_topic_content_accepts_fenced_json():
    payload = json.dumps({"summary": "s", "quiz": [QUESTION]})
    generator = ContentGenerator(llm=fake_llm(f"```json\n{payload}\n```"))
    assert generator.generate_topic_content("S", "U", "T").summary == "s"


def test_generate_test_questions():
    generator = ContentGenerator(llm=fake_llm({"questions": [{**QUESTION, "difficulty": "hard"}]}))
    test = generator.generate_test("Automata", ["DFA", "NFA"], question_count=1)
    assert test.questions[0].difficulty == "hard"


def test_invalid_ai_output_raises():
    with pytest.raises(AIResponseError):
        ContentGenerator(llm=fake_llm("this is not json")).generate_topic_content("S", "U", "T")
    with pytest.raises(AIResponseError):
        ContentGenerator(llm=fake_llm({"summary": "missing quiz"})).generate_topic_content("S", "U", "T")


def test_parse_syllabus_text():
    parser = SyllabusParser(llm=fake_llm({
        "subjects": [{
            "name": "Theory of Computation",
            "color": "#3B82F6",
            "units": [{"name": "Unit I: The Theory Of Automata", "topics": ["Finite automata", "Examples of automata machine"]}],
        }]
    }))
    syllabus = parser.parse_text("UNIT - I: The Theory Of Automata CO1 Finite automata, Examples of automata machine")
    unit = syllabus.subjects[0].units[0]
    assert [t.name for t in unit.topics] == ["Finite automata", "Examples of automata machine"]
    assert all(t.difficulty == "medium" for t in unit.topics)


def test_study_buddy_reply():
    buddy = StudyBuddy(llm=fake_llm("**Great question!** A DFA has one transition per symbol."))
    answer = buddy.reply([{"role": "user", "content": "What is a DFA?"}])
    assert answer.startswith("**Great question!**")


def test_messages_with_images_become_multimodal():
    messages = to_langchain_messages([
        {"role": "user", "content": "", "image_url": "https://example.com/diagram.png"},
        {"role": "assistant", "content": "It shows a state machine."},
    ])
    assert isinstance(messages[0], HumanMessage)
    assert messages[0].content[0] == {"type": "text", "text": "Please analyze this image."}
    assert messages[0].content[1]["image_url"]["url"] == "https://example.com/diagram.png"
    assert isinstance(messages[1], AIMessage)


def test_claude_without_api_key_is_rejected(monkeypatch):
    monkeypatch.setattr(ai_gateway.settings, "ai_provider", "claude")
    monkeypatch.setattr(ai_gateway.settings, "claude_api_key", "")
    with pytest.raises(AIConfigurationError):
        get_llm()


def test_table_parsing_does_not_need_a_model(monkeypatch, tmp_path):
    monkeypatch.setattr(ai_gateway.settings, "ai_provider", "claude")
    monkeypatch.setattr(ai_gateway.settings, "claude_api_key", "")
    path = tmp_path / "syllabus.csv"
    path.write_text("subject,unit,topic\nMath,Algebra,Sets\n")
    assert SyllabusParser().auto_parse(str(path)).subjects[0].name == "Math"
