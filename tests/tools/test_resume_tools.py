"""Tests for the workspace tools."""

import json

import pytest

from resume_ats.domain.models import ContactData, ExperienceEntry, ResumeData
from resume_ats.tools import ATSScorerTool, JobDescriptionTool, ResumeImportTool, ToolResult


@pytest.fixture
def resume_file(tmp_path, full_resume_text):
    path = tmp_path / "resume.txt"
    path.write_text(full_resume_text, encoding="utf-8")
    return path


@pytest.fixture
def resume_json(tmp_path):
    resume = ResumeData(
        contact=ContactData(first_name="Jane", email="jane@example.com", phone="555-123-4567"),
        experience=[
            ExperienceEntry(
                company="Acme",
                position="Engineer",
                highlights=["Reduced build times by 40% by caching Docker layers in CI"],
            )
        ],
    )
    path = tmp_path / "resume.json"
    path.write_text(resume.model_dump_json(), encoding="utf-8")
    return path


class TestToolResult:
    def test_to_message(self):
        assert ToolResult(success=True, output="done").to_message() == "done"
        assert ToolResult(success=False, output="", error="boom").to_message() == "Error: boom"



class TestResumeImportTool:
    @pytest.mark.asyncio
    async def test_parses_file(self, tmp_path, resume_file):
        tool = ResumeImportTool(workspace_dir=str(tmp_path))
        result = await tool.execute(path="resume.txt")
        assert result.success
        assert result.output.startswith("## Resume Import: John Doe")
        assert result.data["data"]["contact"]["email"] == "john@example.com"
        assert len(result.data["data"]["experience"]) == 2
        assert result.data["unmatched_chunks"] == []
        assert result.data["confidence"]["experience"] == "complete"
        assert "Needs Review" not in result.output
        assert result.data["warnings"] == {}

    @pytest.mark.asyncio
    async def test_flags_incomplete_sections(self, tmp_path):
        (tmp_path / "resume.txt").write_text(
            "Jane Roe\njane@roe.dev\n\nExperience\n- Built things without a title\n", encoding="utf-8"
        )
        result = await ResumeImportTool(workspace_dir=str(tmp_path)).execute(path="resume.txt")
        assert result.success
        assert result.data["confidence"]["experience"] == "incomplete"
        assert "### Needs Review\nexperience" in result.output
        messages = [w["message"] for w in result.data["warnings"]["0"]]
        assert "No dates detected" in messages
        assert "Position field is empty" in messages

    @pytest.mark.asyncio
    async def test_cached_until_file_changes(self, tmp_path, resume_file):
        tool = ResumeImportTool(workspace_dir=str(tmp_path))
        first = await tool.execute(path=str(resume_file))
        second = await tool.execute(path=str(resume_file))
        assert first is second

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        result = await ResumeImportTool(workspace_dir=str(tmp_path)).execute(path="nope.txt")
        assert not result.success
        assert "not found" in result.error

    @pytest.mark.asyncio
    async def test_empty_file(self, tmp_path):
        (tmp_path / "blank.txt").write_text("  \n", encoding="utf-8")
        result = await ResumeImportTool(workspace_dir=str(tmp_path)).execute(path="blank.txt")
        assert not result.success
        assert "is empty" in result.error


class TestATSScorerTool:
    @pytest.mark.asyncio
    async def test_scores_structured_resume(self, tmp_path, resume_json):
        tool = ATSScorerTool(workspace_dir=str(tmp_path))
        result = await tool.execute(path="resume.json")
        assert result.success
        assert result.data["breakdown"]["formatting"]["score"] == 14
        assert result.data["breakdown"]["keyword_match"]["score"] == 20
        assert result.output.startswith(f"## ATS Score: {result.data['score']}/100")

    @pytest.mark.asyncio
    async def test_job_description_text(self, tmp_path, resume_json):
        tool = ATSScorerTool(workspace_dir=str(tmp_path))
        result = await tool.execute(path="resume.json", job_description="Requirements:\n- Docker\n- Kubernetes")
        assert result.data["keywords"] == {"matched": ["docker"], "missing": ["kubernetes"]}

    @pytest.mark.asyncio
    async def test_job_description_file(self, tmp_path, resume_json):
        (tmp_path / "jd.txt").write_text("Requirements:\n- Docker", encoding="utf-8")
        tool = ATSScorerTool(workspace_dir=str(tmp_path))
        result = await tool.execute(path="resume.json", job_description_path="jd.txt")
        assert result.data["breakdown"]["keyword_match"]["score"] == 40

    @pytest.mark.asyncio
    async def test_default_industry(self, tmp_path, resume_json):
        tool = ATSScorerTool(workspace_dir=str(tmp_path), default_industry="software")
        result = await tool.execute(path="resume.json")
        assert "Docker" in result.data["keywords"]["matched"]

    @pytest.mark.asyncio
    async def test_plain_text_resume(self, tmp_path, resume_file):
        result = await ATSScorerTool(workspace_dir=str(tmp_path)).execute(path="resume.txt")
        assert result.success
        assert result.data["breakdown"]["formatting"]["score"] == 14
        assert 0 <= result.data["score"] <= 100

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path):
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        result = await ATSScorerTool(workspace_dir=str(tmp_path)).execute(path="broken.json")
        assert not result.success
        assert result.error

    @pytest.mark.asyncio
    async def test_missing_job_description_file(self, tmp_path, resume_json):
        tool = ATSScorerTool(workspace_dir=str(tmp_path))
        result = await tool.execute(path="resume.json", job_description_path="missing.txt")
        assert not result.success
        assert "Job description not found" in result.error

    @pytest.mark.asyncio
    async def test_data_is_json_serialisable(self, tmp_path, resume_json):
        result = await ATSScorerTool(workspace_dir=str(tmp_path)).execute(path="resume.json")
        assert json.loads(json.dumps(result.data))["score"] == result.data["score"]


class TestJobDescriptionTool:
    @pytest.mark.asyncio
    async def test_text(self, tmp_path):
        tool = JobDescriptionTool(workspace_dir=str(tmp_path))
        result = await tool.execute(text="Data Engineer\n\nRequirements:\n- 4+ years of SQL")
        assert result.success
        assert result.data["title"] == "Data Engineer"
        assert result.data["extracted_requirements"]["years_of_experience"] == 4
        assert result.data["sections"]["required"] == "- 4+ years of SQL"

    @pytest.mark.asyncio
    async def test_path(self, tmp_path):
        (tmp_path / "jd.md").write_text("Requirements:\n- PMP required", encoding="utf-8")
        result = await JobDescriptionTool(workspace_dir=str(tmp_path)).execute(path="jd.md")
        assert result.data["extracted_requirements"]["certifications"] == ["PMP"]

    @pytest.mark.asyncio
    async def test_needs_input(self, tmp_path):
        result = await JobDescriptionTool(workspace_dir=str(tmp_path)).execute()
        assert not result.success
        assert result.error == "Provide either text or path"
