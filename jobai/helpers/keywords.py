"""
Static keyword tables used by the heuristic field extractor.

The tables are immutable and built once at import. ``FieldExtractor`` takes a
``KeywordTables`` instance so tests and callers can supply their own.
"""
import re
from dataclasses import dataclass, field
from typing import Pattern, Tuple

SKILL_KEYWORDS = (
    # Programming languages
    'javascript', 'python', 'java', 'c++', 'c#', 'php', 'ruby', 'go', 'rust', 'swift',
    'kotlin', 'scala', 'r', 'matlab', 'perl', 'shell', 'bash', 'powershell',

    # Web technologies
    'html', 'css', 'react', 'angular', 'vue', 'node.js', 'express', 'django', 'flask',
    'spring', 'laravel', 'rails', 'asp.net', 'jquery', 'bootstrap', 'sass', 'less',

    # Databases
    'mysql', 'postgresql', 'mongodb', 'redis', 'elasticsearch', 'oracle', 'sqlite',
    'cassandra', 'dynamodb', 'firebase',

    # Cloud & DevOps
    'aws', 'azure', 'gcp', 'docker', 'kubernetes', 'jenkins', 'gitlab', 'github',
    'terraform', 'ansible', 'chef', 'puppet', 'vagrant',

    # Tools
    'git', 'svn', 'jira', 'confluence', 'slack', 'trello', 'asana', 'figma', 'sketch',
    'photoshop', 'illustrator', 'indesign',

    # Soft skills
    'leadership', 'management', 'communication', 'teamwork', 'problem solving',
    'analytical', 'creative', 'organized', 'detail oriented', 'time management',

    # Methodologies
    'agile', 'scrum', 'kanban', 'waterfall', 'lean', 'six sigma', 'devops', 'ci/cd',
)

# Checked in this order; the first category with a keyword contained in the
# skill name wins, anything else is "other".
SKILL_CATEGORIES = (
    ('technical', ('javascript', 'python', 'java', 'react', 'node.js', 'sql', 'aws', 'docker')),
    ('soft', ('leadership', 'communication', 'teamwork', 'problem solving', 'management')),
    ('language', ('english', 'spanish', 'french', 'german', 'chinese', 'japanese')),
    ('certification', ('aws certified', 'pmp', 'cissp', 'comptia')),
)

CONFIDENCE_CONTEXT_WORDS = ('experience', 'proficient', 'expert', 'advanced', 'years')

EDUCATION_KEYWORDS = (
    'bachelor', 'master', 'phd', 'doctorate', 'associate', 'diploma', 'certificate',
    'university', 'college', 'institute', 'school', 'degree',
)

INSTITUTION_KEYWORDS = ('university', 'college', 'institute', 'school')

DEGREE_PATTERNS = (
    re.compile(r"bachelor'?s?\s+(?:of\s+)?(?:science|arts|engineering|business)", re.I),
    re.compile(r"master'?s?\s+(?:of\s+)?(?:science|arts|engineering|business)", re.I),
    re.compile(r"phd|doctorate", re.I),
    re.compile(r"associate'?s?\s+degree", re.I),
)

# Tried in order; a bare year anywhere in the line wins
DATE_PATTERNS = (
    re.compile(r"\b(?:19|20)\d{2}\b"),
    re.compile(r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+(?:19|20)\d{2}\b", re.I),
    re.compile(r"\b\d{1,2}/\d{1,2}/(?:19|20)\d{2}\b"),
)

JOB_TITLE_KEYWORDS = (
    'developer', 'engineer', 'manager', 'analyst', 'consultant', 'specialist',
    'coordinator', 'assistant', 'director', 'lead', 'senior', 'junior',
)

COMPANY_SUFFIXES = ('Inc', 'LLC', 'Corp', 'Ltd')

DURATION_PATTERNS = (
    re.compile(r"\b(?P<start>(?:19|20)\d{2})\s*[-–]\s*(?P<end>(?:19|20)\d{2})\b"),
    re.compile(r"\b(?P<start>(?:19|20)\d{2})\s*[-–]\s*(?P<current>present)\b", re.I),
    re.compile(r"\b\d+\s+years?\b", re.I),
    re.compile(r"\b\d+\s+months?\b", re.I),
)

SECTION_KEYWORDS = (
    'education', 'experience', 'skills', 'projects', 'certifications',
    'awards', 'publications', 'references',
)

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_PATTERN = re.compile(r"(?:\+?1[-.\s]?)?\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}")
URL_PATTERN = re.compile(
    r"https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b[-a-zA-Z0-9()@:%_+.~#?&/=]*"
)

# Used by the no-provider fallback analysis
FALLBACK_SKILLS = ('javascript', 'python', 'react', 'node.js', 'sql', 'aws', 'docker', 'git')


@dataclass(frozen=True)
class KeywordTables:
    skills: Tuple[str, ...] = SKILL_KEYWORDS
    skill_categories: Tuple[Tuple[str, Tuple[str, ...]], ...] = SKILL_CATEGORIES
    context_words: Tuple[str, ...] = CONFIDENCE_CONTEXT_WORDS
    education_keywords: Tuple[str, ...] = EDUCATION_KEYWORDS
    institution_keywords: Tuple[str, ...] = INSTITUTION_KEYWORDS
    degree_patterns: Tuple[Pattern, ...] = DEGREE_PATTERNS
    date_patterns: Tuple[Pattern, ...] = DATE_PATTERNS
    job_title_keywords: Tuple[str, ...] = JOB_TITLE_KEYWORDS
    company_suffixes: Tuple[str, ...] = COMPANY_SUFFIXES
    duration_patterns: Tuple[Pattern, ...] = DURATION_PATTERNS
    section_keywords: Tuple[str, ...] = SECTION_KEYWORDS
    email_pattern: Pattern = field(default=EMAIL_PATTERN)
    phone_pattern: Pattern = field(default=PHONE_PATTERN)
    url_pattern: Pattern = field(default=URL_PATTERN)
    fallback_skills: Tuple[str, ...] = FALLBACK_SKILLS


DEFAULT_KEYWORDS = KeywordTables()
