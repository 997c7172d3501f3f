"""Tests for ATS scoring."""

import pytest

from resume_ats.domain.ats_scorer import (
    CATEGORY_MAX,
    NO_JOB_DESCRIPTION_SCORE,
    compute_ats_score,
    extract_keywords,
    format_ats_report,
    score_to_grade,
)
from resume_ats.domain.models import (
    CertificationEntry,
    ContactData,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeData,
    SkillCategory,
    SkillItem,
    SummaryData,
)


@pytest.fixture
def strong_resume():
    """Complete resume whose bullets are all quantified and start with action verbs."""
    return ResumeData(
        contact=ContactData(
            first_name="Jane",
            last_name="Smith",
            email="jane.smith@email.com",
            phone="(555) 123-4567",
            location="Austin, TX",
        ),
        summary=SummaryData(text="Backend engineer with eight years building payment systems."),
        experience=[
            ExperienceEntry(
                company="Acme Corp",
                position="Senior Software Engineer",
                highlights=[
                    "Reduced deployment time by 40% by automating release pipelines with Docker",
                    "Increased test coverage from 60% to 95% across the Python services",
                    "Built RESTful APIs handling 10,000+ requests per second on AWS infrastructure",
                ],
            ),
            ExperienceEntry(
                company="StartupCo",
                position="Software Engineer",
                highlights=[
                    "Led a team of 5 engineers delivering 3 major product launches per year",
                    "Optimized PostgreSQL queries, cutting average response time by 35%",
                    "Implemented CI/CD pipelines serving 200+ deployments per month for 12 teams",
                ],
            ),
        ],
        education=[EducationEntry(institution="State University", degree="B.S.", field="Computer Science")],
        skills=[
            SkillCategory(
                category="Languages",
                items=[SkillItem(name="Python"), SkillItem(name="Go"), SkillItem(name="PostgreSQL")],
            )
        ],
        projects=[ProjectEntry(name="ledger-cli", technologies=["Python"])],
        certifications=[CertificationEntry(name="AWS Certified Developer", issuer="Amazon")],
    )


class TestOverallScore:
    def test_strong_resume_without_job_description(self, strong_resume):
        result = compute_ats_score(strong_resume)
        breakdown = result.breakdown
        assert breakdown.keyword_match.score == NO_JOB_DESCRIPTION_SCORE
        assert breakdown.formatting.score == 20
        assert breakdown.content_quality.score == 20
        assert breakdown.section_completeness.score == 10
        assert breakdown.readability.score == 10
        assert result.score == 80

    def test_empty_resume(self):
        result = compute_ats_score(ResumeData())
        assert result.score == NO_JOB_DESCRIPTION_SCORE
        assert result.breakdown.formatting.score == 0
        assert result.breakdown.content_quality.score == 0
        assert result.breakdown.section_completeness.score == 0
        assert result.breakdown.readability.score == 0
        assert "Add your email address." in result.suggestions

    def test_max_scores_sum_to_100(self, strong_resume):
        result = compute_ats_score(strong_resume, "Requirements:\n- Python")
        assert sum(c.max_score for _, c in result.breakdown.categories()) == 100
        assert [c.max_score for _, c in result.breakdown.categories()] == list(CATEGORY_MAX.values())

    def test_score_within_bounds(self, strong_resume):
        result = compute_ats_score(strong_resume, "Requirements:\n- Python\n- Docker\n- PostgreSQL")
        assert 0 <= result.score <= 100
        assert result.score == 100

    def test_to_dict_shape(self, strong_resume):
        payload = compute_ats_score(strong_resume).to_dict()
        assert set(payload) == {"score", "breakdown", "keywords"}
        assert payload["breakdown"]["formatting"] == {"score": 20, "max_score": 20, "suggestions": []}
        assert payload["keywords"] == {"matched": [], "missing": []}


class TestKeywordMatch:
    def test_blank_job_description_gets_baseline(self, strong_resume):
        category = compute_ats_score(strong_resume, "   \n ").breakdown.keyword_match
        assert category.score == NO_JOB_DESCRIPTION_SCORE
        assert category.suggestions == ["Provide a job description to get a detailed keyword match analysis."]

    def test_partial_match(self, strong_resume):
        result = compute_ats_score(strong_resume, "Requirements:\n- Python\n- Docker\n- Kubernetes")
        assert result.keywords.matched == ["python", "docker"]
        assert result.keywords.missing == ["kubernetes"]
        assert result.breakdown.keyword_match.score == 27
        assert result.breakdown.keyword_match.suggestions == ["Consider incorporating these keywords: kubernetes."]
        assert result.score == 87

    def test_synonyms_count_as_matches(self):
        resume = ResumeData(
            skills=[SkillCategory(category="Tools", items=[SkillItem(name="Kubernetes"), SkillItem(name="PostgreSQL")])]
        )
        result = compute_ats_score(resume, "Requirements:\n- K8s\n- Postgres")
        assert result.keywords.matched == ["k8s", "postgres"]
        assert result.breakdown.keyword_match.score == 40

    def test_word_boundaries(self):
        resume = ResumeData(skills=[SkillCategory(category="Languages", items=[SkillItem(name="JavaScript")])])
        result = compute_ats_score(resume, "Requirements:\n- Java")
        assert result.keywords.missing == ["java"]
        assert result.breakdown.keyword_match.score == 0

    def test_low_match_and_soft_skill_suggestions(self):
        resume = ResumeData(skills=[SkillCategory(category="Languages", items=[SkillItem(name="Python")])])
        result = compute_ats_score(resume, "Requirements:\n- Leadership\n- Communication")
        suggestions = result.breakdown.keyword_match.suggestions
        assert suggestions[0].startswith("Your resume matches only 0%")
        assert suggestions[-1] == "Show these soft skills through your bullet points: leadership, communication."

    def test_job_description_without_keywords(self, strong_resume):
        category = compute_ats_score(strong_resume, "the and of").breakdown.keyword_match
        assert category.score == 0
        assert category.suggestions

    def test_unstructured_job_description_uses_full_text(self, strong_resume):
        result = compute_ats_score(strong_resume, "We want someone who knows Python and Terraform")
        assert "python" in result.keywords.matched
        assert "terraform" in result.keywords.missing

    def test_industry_keywords_without_job_description(self, strong_resume):
        result = compute_ats_score(strong_resume, industry="Software")
        assert "Python" in result.keywords.matched
        assert "Docker" in result.keywords.matched
        assert "Kubernetes" in result.keywords.missing
        assert 0 < result.breakdown.keyword_match.score < 40

    def test_unknown_industry_falls_back_to_baseline(self, strong_resume):
        result = compute_ats_score(strong_resume, industry="astronomy")
        assert result.breakdown.keyword_match.score == NO_JOB_DESCRIPTION_SCORE


class TestCategoryScoring:
    def test_formatting_points(self):
        result = compute_ats_score(ResumeData(contact=ContactData(email="a@b.co", location="Remote")))
        assert result.breakdown.formatting.score == 13
        assert result.breakdown.formatting.suggestions == ["Add your phone number."]

    def test_content_quality_ratios(self):
        resume = ResumeData(
            experience=[
                ExperienceEntry(
                    company="Acme",
                    position="Engineer",
                    highlights=["Increased revenue by 20%", "Responsible for the billing service"],
                )
            ]
        )
        # half quantified, half action verbs
        assert compute_ats_score(resume).breakdown.content_quality.score == 10

    def test_completeness_with_one_bonus_section(self, strong_resume):
        resume = strong_resume.model_copy(update={"projects": []})
        category = compute_ats_score(resume).breakdown.section_completeness
        assert category.score == 9
        assert len(category.suggestions) == 1

    def test_readability_single_short_role(self):
        resume = ResumeData(
            experience=[ExperienceEntry(company="Acme", position="Engineer", highlights=["Built APIs"])]
        )
        # too few bullets (0) + short bullets (1) + one role (2)
        assert compute_ats_score(resume).breakdown.readability.score == 3


class TestExtractKeywords:
    def test_phrases_kept_whole(self):
        assert extract_keywords("Experience with machine learning and Python") == ["machine learning", "python"]

    def test_dedupes_and_drops_noise(self):
        assert extract_keywords("Python, python and PYTHON for 5 years in 2023") == ["python"]

    def test_empty(self):
        assert extract_keywords("") == []


class TestReport:
    @pytest.mark.parametrize(
        "score,grade",
        [(95, "Excellent"), (90, "Excellent"), (89, "Good"), (75, "Good"), (74, "Fair"), (60, "Fair"), (59, "Needs Work")],
    )
    def test_grades(self, score, grade):
        assert score_to_grade(score) == grade

    def test_report_contents(self, strong_resume):
        report = format_ats_report(compute_ats_score(strong_resume, "Requirements:\n- Python\n- Kubernetes"))
        assert report.startswith("## ATS Score:")
        assert "| Keyword Match" in report
        assert "### Matching Keywords (1)" in report
        assert "### Missing Keywords (1)" in report
        assert "[Keyword Match] Consider incorporating these keywords: kubernetes." in report


class TestMonotonicity:
    def _resume(self, highlights):
        return ResumeData(experience=[ExperienceEntry(company="Acme", position="Engineer", highlights=highlights)])

    def test_quantified_action_bullets_beat_vague_ones(self):
        strong = compute_ats_score(self._resume(["increased engagement by 35%", "Led a team of 8"]))
        weak = compute_ats_score(self._resume(["Was responsible for things", "Worked with people"]))
        assert strong.breakdown.content_quality.score > weak.breakdown.content_quality.score

    @pytest.mark.parametrize(
        "before,after",
        [
            ("Worked on the billing service", "Worked on the billing service, cutting costs by 30%"),
            ("Worked on the billing service", "Built the billing service"),
            ("Handled support tickets", "Resolved 200+ support tickets per month"),
            ("Led the billing rewrite", "Led the billing rewrite, saving $40,000 a year"),
        ],
    )
    def test_stronger_bullet_never_lowers_content_quality(self, before, after):
        others = ["Wrote internal docs", "Reduced page load time by 25%"]
        weak = compute_ats_score(self._resume(others + [before])).breakdown.content_quality.score
        strong = compute_ats_score(self._resume(others + [after])).breakdown.content_quality.score
        assert strong >= weak

    def test_adding_contact_fields_never_lowers_formatting(self):
        steps = [
            ContactData(),
            ContactData(email="a@b.co"),
            ContactData(email="a@b.co", phone="555-123-4567"),
            ContactData(email="a@b.co", phone="555-123-4567", location="Remote"),
        ]
        scores = [compute_ats_score(ResumeData(contact=c)).breakdown.formatting.score for c in steps]
        assert scores == sorted(scores)
        assert scores[-1] == 20
