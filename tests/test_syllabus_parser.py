import pandas as pd
import pytest

from studytrack.errors import InvalidDifficultyError
from studytrack.syllabus_parser import SyllabusParser


def write_csv(tmp_path, rows, name="syllabus.csv"):
    path = tmp_path / name
    pd.DataFrame(rows).to_csv(path, index=False)
    return str(path)


def test_parse_csv_groups_subjects_and_units(tmp_path):
    path = write_csv(tmp_path, [
        {"Subject": "Math", "Unit": "Algebra", "Topic": "Sets", "Difficulty": "easy", "Interval Days": None},
        {"Subject": "Math", "Unit": "Algebra", "Topic": "Relations", "Difficulty": "", "Interval Days": 2},
        {"Subject": "Math", "Unit": "Calculus", "Topic": "Limits", "Difficulty": "HARD", "Interval Days": 0},
        {"Subject": "Physics", "Unit": "Optics", "Topic": "Lenses", "Difficulty": None, "Interval Days": None},
    ])

    syllabus = SyllabusParser.parse_table(path)

    assert [s.name for s in syllabus.subjects] == ["Math", "Physics"]
    math = syllabus.subjects[0]
    assert [u.name for u in math.units] == ["Algebra", "Calculus"]
    sets, relations = math.units[0].topics
    assert (sets.name, sets.difficulty, sets.revision_interval_days) == ("Sets", "easy", None)
    assert (relations.difficulty, relations.revision_interval_days) == ("medium", 2)
    limits = math.units[1].topics[0]
    assert (limits.difficulty, limits.revision_interval_days) == ("hard", None)
    assert syllabus.subjects[0].color != syllabus.subjects[1].color


def test_parse_csv_skips_incomplete_rows(tmp_path):
    path = write_csv(tmp_path, [
        {"subject": "Math", "unit": "Algebra", "topic": "Sets"},
        {"subject": "Math", "unit": None, "topic": "Orphan"},
        {"subject": None, "unit": "Algebra", "topic": "Nobody"},
    ])
    syllabus = SyllabusParser.parse_table(path)
    assert [t.name for t in syllabus.subjects[0].units[0].topics] == ["Sets"]


def test_parse_csv_rejects_unknown_difficulty(tmp_path):
    path = write_csv(tmp_path, [{"subject": "Math", "unit": "Algebra", "topic": "Sets", "difficulty": "brutal"}])
    with pytest.raises(InvalidDifficultyError):
        SyllabusParser.parse_table(path)


def test_auto_parse_rejects_unknown_extension(tmp_path):
    path = tmp_path / "syllabus.pdf"
    path.write_bytes(b"%PDF")
    with pytest.raises(ValueError, match="Unsupported file format"):
        SyllabusParser().auto_parse(str(path))
