"""
Heuristic resume field extraction.

Everything here is a pure function of the normalized text and the injected
keyword tables: no network access, no randomness, stable ordering.
"""
from typing import List, Optional

from jobai.helpers.keywords import DEFAULT_KEYWORDS, KeywordTables
from jobai.models.models import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    HeuristicExtraction,
    SkillCategory,
    SkillEntry,
)
from jobai.utils.logging_config import get_logger

logger = get_logger(__name__)


class FieldExtractor:
    """Keyword/regex based extraction of contacts, skills, education and experience."""

    def __init__(self, tables: KeywordTables = DEFAULT_KEYWORDS):
        self.tables = tables

    def extract_basic_info(self, text: str) -> HeuristicExtraction:
        result = HeuristicExtraction(
            contacts=self.extract_contacts(text),
            skills=self.extract_skills(text),
            education=self.extract_education(text),
            experience=self.extract_experience(text),
        )
        logger.debug(
            f"Heuristic extraction found {len(result.skills)} skills, "
            f"{len(result.experience)} experience and {len(result.education)} education entries"
        )
        return result

    # -------- Contacts --------
    def extract_contacts(self, text: str) -> ContactInfo:
        return ContactInfo(
            emails=self.extract_emails(text),
            phones=self.extract_phones(text),
            urls=self.extract_urls(text),
        )

    def extract_emails(self, text: str) -> List[str]:
        return [m.group(0) for m in self.tables.email_pattern.finditer(text)]

    def extract_phones(self, text: str) -> List[str]:
        return [m.group(0) for m in self.tables.phone_pattern.finditer(text)]

    def extract_urls(self, text: str) -> List[str]:
        return [m.group(0) for m in self.tables.url_pattern.finditer(text)]

    # -------- Skills --------
    def extract_skills(self, text: str) -> List[SkillEntry]:
        text_lower = text.lower()
        found = []
        for skill in self.tables.skills:
            if skill in text_lower:
                found.append(SkillEntry(
                    name=skill,
                    category=self.categorize_skill(skill),
                    confidence=self.skill_confidence(text_lower, skill),
                ))
        return found

    def categorize_skill(self, skill: str) -> SkillCategory:
        skill_lower = skill.lower()
        for category, keywords in self.tables.skill_categories:
            if any(k in skill_lower for k in keywords):
                return SkillCategory(category)
        return SkillCategory.OTHER

    def skill_confidence(self, text_lower: str, skill: str) -> float:
        """Confidence from occurrence count and reinforcement words.

        Computed in tenths: ``min(9, 3 + occurrences)`` plus one per context
        word written directly before or after the skill, capped at 10.
        """
        occurrences = text_lower.count(skill)
        tenths = min(9, 3 + occurrences)
        for word in self.tables.context_words:
            if f"{word} {skill}" in text_lower or f"{skill} {word}" in text_lower:
                tenths += 1
        return min(10, tenths) / 10

    # -------- Education --------
    def extract_education(self, text: str) -> List[EducationEntry]:
        lines = text.split("\n")
        entries = []
        for index, line in enumerate(lines):
            line_lower = line.lower()
            if any(k in line_lower for k in self.tables.education_keywords):
                entries.append(EducationEntry(
                    degree=self.extract_degree(line),
                    institution=self.extract_institution(lines, index),
                    graduation_date=self.extract_date(line),
                ))
        return entries

    def extract_degree(self, line: str) -> str:
        for pattern in self.tables.degree_patterns:
            match = pattern.search(line)
            if match:
                return match.group(0)
        return line.strip()

    def extract_institution(self, lines: List[str], index: int) -> Optional[str]:
        for current in lines[index:index + 3]:
            current_lower = current.lower()
            if any(k in current_lower for k in self.tables.institution_keywords):
                return current.strip()
        return None

    def extract_date(self, line: str) -> Optional[str]:
        for pattern in self.tables.date_patterns:
            match = pattern.search(line)
            if match:
                return match.group(0)
        return None

    # -------- Experience --------
    def extract_experience(self, text: str) -> List[ExperienceEntry]:
        lines = text.split("\n")
        entries = []
        for index, line in enumerate(lines):
            line_lower = line.lower()
            if any(k in line_lower for k in self.tables.job_title_keywords):
                duration, start, end, current = self.extract_duration(lines, index)
                entries.append(ExperienceEntry(
                    title=line.strip(),
                    company=self.extract_company(lines, index),
                    duration=duration,
                    start_date=start,
                    end_date=end,
                    current=current,
                    description=self.extract_job_description(lines, index),
                ))
        return entries

    def extract_company(self, lines: List[str], index: int) -> Optional[str]:
        for current in lines[index:index + 2]:
            if any(suffix in current for suffix in self.tables.company_suffixes):
                return current.strip()
        return None

    def extract_duration(self, lines: List[str], index: int):
        """Return ``(duration, start_date, end_date, current)`` for a matched title line."""
        for current in lines[index:index + 3]:
            for pattern in self.tables.duration_patterns:
                match = pattern.search(current)
                if not match:
                    continue
                groups = match.groupdict()
                is_current = groups.get("current") is not None
                return match.group(0), groups.get("start"), groups.get("end"), is_current
        return None, None, None, False

    def extract_job_description(self, lines: List[str], index: int) -> str:
        description = []
        for current in lines[index + 1:index + 5]:
            current = current.strip()
            if not current or self.is_likely_new_section(current):
                break
            description.append(current)
        return " ".join(description)

    def is_likely_new_section(self, line: str) -> bool:
        line_lower = line.lower()
        return any(k in line_lower for k in self.tables.section_keywords)
