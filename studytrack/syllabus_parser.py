import pandas as pd
from pathlib import Path
from typing import Any, Dict, Optional

from studytrack.ai_gateway import JsonGenerator
from studytrack.errors import InvalidDifficultyError
from studytrack.logging_config import logger
from studytrack.schemas import ParsedSyllabus, SUBJECT_COLORS
from studytrack.spaced_repetition import DIFFICULTIES

TABLE_EXTENSIONS = [".csv", ".xlsx", ".xls"]
TEXT_EXTENSIONS = [".txt", ".md"]

# AI input is truncated to keep prompts within model context
MAX_TEXT_CHARS = 15000


class SyllabusParser(JsonGenerator):
    """
    Build a Subject -> Unit -> Topic tree from a syllabus.

    Tables (CSV/Excel) are read directly with pandas. Free text syllabi are
    sent to the configured AI model, which extracts units and topics.
    """

    @staticmethod
    def parse_table(file_path: str) -> ParsedSyllabus:
        """
        Parse a syllabus table.
        Expected columns: Subject, Unit, Topic
        Optional columns: Difficulty, Interval Days, Color
        """
        if Path(file_path).suffix.lower() == ".csv":
            df = pd.read_csv(file_path)
        else:
            df = pd.read_excel(file_path)

        # Normalize column names
        df.columns = df.columns.str.strip().str.lower().str.replace(" ", "_")

        subjects: Dict[str, Dict[str, Any]] = {}
        for _, row in df.iterrows():
            subject = SyllabusParser._clean(row.get("subject"))
            unit = SyllabusParser._clean(row.get("unit"))
            topic = SyllabusParser._clean(row.get("topic"))

            # Skip rows with missing essential data
            if not (subject and unit and topic):
                continue

            entry = subjects.setdefault(subject, {
                "name": subject,
                "color": SyllabusParser._clean(row.get("color")) or SUBJECT_COLORS[len(subjects) % len(SUBJECT_COLORS)],
                "units": {}
            })
            entry["units"].setdefault(unit, []).append({
                "name": topic,
                "difficulty": SyllabusParser._parse_difficulty(row.get("difficulty")),
                "revision_interval_days": SyllabusParser._parse_interval(
                    row.get("interval_days", row.get("revision_interval_days"))
                )
            })

        return ParsedSyllabus(subjects=[
            {
                "name": entry["name"],
                "color": entry["color"],
                "units": [{"name": name, "topics": topics} for name, topics in entry["units"].items()]
            }
            for entry in subjects.values()
        ])

    @staticmethod
    def _clean(value: Any) -> Optional[str]:
        if value is None or pd.isna(value):
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def _parse_difficulty(value: Any) -> str:
        """Blank cells default to medium; anything else must be a known tier"""
        text = SyllabusParser._clean(value)
        if text is None:
            return "medium"
        difficulty = text.lower()
        if difficulty not in DIFFICULTIES:
            raise InvalidDifficultyError(text)
        return difficulty

    @staticmethod
    def _parse_interval(value: Any) -> Optional[float]:
        """Custom first-review interval; non-positive or blank means none"""
        if value is None or pd.isna(value):
            return None
        try:
            days = float(value)
        except (TypeError, ValueError):
            return None
        return days if days > 0 else None

    def parse_text(self, text: str) -> ParsedSyllabus:
        """Extract subjects, units and topics from syllabus text using AI"""
        syllabus = self._generate(
            ParsedSyllabus,
            f"""You are an expert syllabus parser. Extract ONLY the actual content from the syllabus document.

CRITICAL PARSING RULES:
1. Look for patterns like "UNIT - I:", "Unit 1:", "UNIT I:" followed by the unit title
2. Topics are usually listed as comma-separated items after each unit heading
3. Ignore "CO1", "CO2" etc. (course outcome markers) - they are NOT topics
4. Ignore hours like "[7Hrs.]" - they are NOT topics
5. Extract ONLY the actual topic names mentioned, NOT generic/random topics
6. If no clear subject name is found, use "Subject" as the name

Topics are plain strings. Use these colors for subjects: {", ".join(SUBJECT_COLORS)}

IMPORTANT: Extract ONLY what's actually written in the document. DO NOT generate or hallucinate topics.""",
            "Parse the following syllabus content and extract the subjects, units, and topics:\n\n{content}",
            {"content": text[:MAX_TEXT_CHARS]}
        )
        logger.info("syllabus_parsed", subjects=len(syllabus.subjects))
        return syllabus

    def auto_parse(self, file_path: str) -> ParsedSyllabus:
        """
        Detect file type and parse accordingly.
        Supports: CSV, Excel (xlsx, xls), plain text (txt, md)
        """
        file_ext = Path(file_path).suffix.lower()

        if file_ext in TABLE_EXTENSIONS:
            return SyllabusParser.parse_table(file_path)
        elif file_ext in TEXT_EXTENSIONS:
            return self.parse_text(Path(file_path).read_text(encoding="utf-8"))
        else:
            raise ValueError(f"Unsupported file format: {file_ext}. Use .csv, .xlsx, .txt or .md")
