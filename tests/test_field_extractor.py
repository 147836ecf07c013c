import pytest

from jobai.helpers.keywords import KeywordTables
from jobai.models.models import SkillCategory
from jobai.services.field_extractor import FieldExtractor


@pytest.fixture
def extractor():
    return FieldExtractor()


class TestContacts:
    """Test cases for contact extraction"""

    def test_contacts_from_header(self, extractor, sample_resume):
        contacts = extractor.extract_contacts(sample_resume)
        assert contacts.emails == ["jane.doe@example.com"]
        assert contacts.phones == ["(555) 123-4567"]
        assert contacts.urls == ["https://github.com/janedoe"]

    def test_no_contacts(self, extractor):
        contacts = extractor.extract_contacts("No contact details here")
        assert contacts.emails == [] and contacts.phones == [] and contacts.urls == []


class TestSkills:
    """Test cases for keyword skill detection"""

    def test_detects_known_skills(self, extractor, sample_resume):
        names = [s.name for s in extractor.extract_skills(sample_resume)]
        assert "python" in names
        assert "docker" in names
        assert "github" in names
        assert len(names) == len(set(names))

    def test_order_follows_keyword_table(self, extractor):
        tables = KeywordTables(skills=("docker", "python"))
        names = [s.name for s in FieldExtractor(tables).extract_skills("python then docker")]
        assert names == ["docker", "python"]

    def test_idempotent(self, extractor, sample_resume):
        assert extractor.extract_skills(sample_resume) == extractor.extract_skills(sample_resume)

    def test_single_mention_confidence(self, extractor):
        assert extractor.skill_confidence("worked with kubernetes daily", "kubernetes") == 0.4

    def test_repeated_and_reinforced_confidence(self, extractor):
        text = "expert python developer. python scripts. more python tools."
        assert extractor.skill_confidence(text, "python") == 0.7

    def test_confidence_capped(self, extractor):
        text = " ".join(["expert python proficient python years"] * 10)
        assert extractor.skill_confidence(text, "python") == 1.0

    @pytest.mark.parametrize("skill,category", [
        ("python", SkillCategory.TECHNICAL),
        ("node.js", SkillCategory.TECHNICAL),
        ("leadership", SkillCategory.SOFT),
        ("time management", SkillCategory.SOFT),
        ("kubernetes", SkillCategory.OTHER),
    ])
    def test_categorize(self, extractor, skill, category):
        assert extractor.categorize_skill(skill) == category

    def test_categories_serialize_as_strings(self, extractor):
        skill = extractor.extract_skills("python")[0]
        assert skill.category == "technical"


class TestEducation:
    """Test cases for education extraction"""

    def test_degree_and_institution(self, extractor, sample_resume):
        education = extractor.extract_education(sample_resume)
        degree_entry = education[0]
        assert degree_entry.degree == "Bachelor of Science"
        assert degree_entry.institution == "State University, May 2015"
        assert degree_entry.graduation_date is None

    def test_institution_line_is_its_own_entry(self, extractor, sample_resume):
        education = extractor.extract_education(sample_resume)
        assert len(education) == 2
        assert education[1].graduation_date == "2015"

    def test_degree_falls_back_to_line(self, extractor):
        assert extractor.extract_degree("  Diploma in Design  ") == "Diploma in Design"

    def test_bare_year_preferred(self, extractor):
        assert extractor.extract_date("State University, May 2015") == "2015"
        assert extractor.extract_date("Graduated 06/15/2018") == "2018"
        assert extractor.extract_date("Class of 2012") == "2012"
        assert extractor.extract_date("No date") is None


class TestExperience:
    """Test cases for experience extraction"""

    def test_entry_fields(self, extractor, sample_resume):
        experience = extractor.extract_experience(sample_resume)
        assert len(experience) == 1
        entry = experience[0]
        assert entry.title == "Senior Software Engineer"
        assert entry.company == "Acme Corp"
        assert entry.duration == "2019 - Present"
        assert entry.start_date == "2019"
        assert entry.end_date is None
        assert entry.current is True

    def test_closed_date_range(self, extractor):
        text = "Data Analyst\nGlobex LLC 2015-2018\nBuilt dashboards"
        entry = extractor.extract_experience(text)[0]
        assert entry.company == "Globex LLC 2015-2018"
        assert entry.duration == "2015-2018"
        assert (entry.start_date, entry.end_date, entry.current) == ("2015", "2018", False)

    def test_year_count_duration(self, extractor):
        entry = extractor.extract_experience("Consultant for 3 years")[0]
        assert entry.duration == "3 years"
        assert entry.start_date is None

    def test_description_stops_at_section_header(self, extractor):
        text = "Backend Developer\nWrote services\nShipped features\nSkills\nPython"
        entry = extractor.extract_experience(text)[0]
        assert entry.description == "Wrote services Shipped features"

    def test_description_at_most_four_lines(self, extractor):
        text = "QA Specialist\na\nb\nc\nd\ne"
        assert extractor.extract_experience(text)[0].description == "a b c d"

    def test_no_matches(self, extractor):
        assert extractor.extract_experience("Hobbies: chess") == []


class TestBasicInfo:
    """Test cases for the combined heuristic pass"""

    def test_extract_basic_info(self, extractor, sample_resume):
        result = extractor.extract_basic_info(sample_resume)
        assert result.contacts.emails == ["jane.doe@example.com"]
        assert result.skills
        assert len(result.experience) == 1
        assert len(result.education) == 2
