"""Tests for the import review state machine."""

import pytest

from resume_ats.domain.import_review import Confidence, ImportReviewState
from resume_ats.domain.models import (
    CertificationEntry,
    ContactData,
    EducationEntry,
    ExperienceEntry,
    PartialResumeData,
    ProjectEntry,
    Section,
    SkillCategory,
    SkillItem,
    SummaryData,
    UnmatchedChunk,
)
from resume_ats.domain.resume_parser import parse_resume_text_with_metadata


@pytest.fixture
def parsed():
    return PartialResumeData(
        contact=ContactData(first_name="Jane", last_name="Doe", email="jane@example.com"),
        summary=SummaryData(text="Backend engineer"),
        experience=[
            ExperienceEntry(company="Acme", position="Engineer", highlights=["a1", "a2", "a3"]),
            ExperienceEntry(company="Globex", position="Developer", highlights=["b1"]),
        ],
        education=[EducationEntry(institution="State University", degree="BS")],
        skills=[SkillCategory(category="Languages", items=[SkillItem(name="Python"), SkillItem(name="Go")])],
    )


@pytest.fixture
def chunks():
    return [
        UnmatchedChunk(text="Hiking, Chess", start_offset=100, end_offset=113),
        UnmatchedChunk(
            text="Led the chess club for two years as its president.", start_offset=120, end_offset=171
        ),
    ]


@pytest.fixture
def state(parsed, chunks):
    return ImportReviewState(parsed, chunks)


def highlights(state, index, section=Section.EXPERIENCE):
    return state.entries(section)[index].highlights


class TestHydration:
    def test_copies_parsed_data(self, parsed, state):
        assert state.contact.first_name == "Jane"
        assert state.summary == "Backend engineer"
        assert [e.company for e in state.entries("experience")] == ["Acme", "Globex"]
        assert state.entries("projects") == []
        assert len(state.unmatched_chunks) == 2
        assert not state.can_undo

        parsed.experience[0].company = "Changed"
        assert state.entries("experience")[0].company == "Acme"

    def test_entries_are_copies(self, state):
        state.entries("experience")[0].highlights.append("sneaky")
        assert highlights(state, 0) == ["a1", "a2", "a3"]

    def test_empty_state(self):
        state = ImportReviewState()
        assert state.contact == ContactData()
        assert state.build_partial_resume_data().present_sections() == []

    def test_from_parser_output(self, full_resume_text):
        result = parse_resume_text_with_metadata(full_resume_text)
        state = ImportReviewState(result.data, result.unmatched_chunks)
        assert len(state.entries(Section.EXPERIENCE)) == 2
        assert state.get_section_confidence("experience") is Confidence.COMPLETE


class TestScalarUpdates:
    def test_update_contact(self, state):
        state.update_contact("email", "new@example.com")
        assert state.contact.email == "new@example.com"
        assert state.can_undo

    def test_unknown_contact_field_is_noop(self, state):
        state.update_contact("nickname", "JD")
        assert not state.can_undo

    def test_update_summary_and_hobbies(self, state):
        state.update_summary("Platform engineer")
        state.update_hobbies(["Chess", "  ", "Running "])
        assert state.summary == "Platform engineer"
        assert state.hobbies == ["Chess", "Running"]


class TestEntryOperations:
    def test_add_entry_from_mapping(self, state):
        state.add_entry("projects", {"name": "ledger-cli"})
        assert [p.name for p in state.entries("projects")] == ["ledger-cli"]

    def test_add_entry_model_and_invalid(self, state):
        state.add_entry(Section.PROJECTS, ProjectEntry(name="one"))
        state.add_entry("summary", {"text": "not an array section"})
        state.add_entry("languages", {"name": "French", "proficiency": "legendary"})
        assert [p.name for p in state.entries("projects")] == ["one"]
        assert state.entries("languages") == []

    def test_update_entry_keeps_id(self, state):
        original_id = state.entries("experience")[0].id
        state.update_entry("experience", 0, {"company": "Initech", "id": "forged"})
        entry = state.entries("experience")[0]
        assert entry.company == "Initech"
        assert entry.id == original_id

    def test_invalid_update_is_noop(self, state):
        state.update_entry("experience", 0, {"current": "not-a-bool"})
        assert not state.can_undo

    def test_remove_entry(self, state):
        state.remove_entry("experience", 0)
        assert [e.company for e in state.entries("experience")] == ["Globex"]

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_out_of_range_index_is_noop(self, state, index):
        state.remove_entry("experience", index)
        assert len(state.entries("experience")) == 2
        assert not state.can_undo

    def test_unknown_section_is_noop(self, state):
        state.remove_entry("nonsense", 0)
        assert not state.can_undo

    def test_reorder_entries(self, state):
        state.reorder_entries("experience", [1, 0])
        assert [e.company for e in state.entries("experience")] == ["Globex", "Acme"]

    def test_reorder_requires_permutation(self, state):
        state.reorder_entries("experience", [0, 0])
        state.reorder_entries("experience", [0])
        assert not state.can_undo

    def test_move_entry(self, state):
        state.add_entry("experience", {"company": "Hooli", "position": "Lead"})
        state.move_entry("experience", 2, 0)
        assert [e.company for e in state.entries("experience")] == ["Hooli", "Acme", "Globex"]


class TestBulletOperations:
    def test_update_bullet(self, state):
        state.update_bullet(0, 1, "rewritten")
        assert highlights(state, 0) == ["a1", "rewritten", "a3"]

    def test_remove_bullet(self, state):
        state.remove_bullet(0, 0)
        assert highlights(state, 0) == ["a2", "a3"]

    def test_add_bullet(self, state):
        state.add_bullet(1)
        state.add_bullet(1, "b2")
        assert highlights(state, 1) == ["b1", "", "b2"]

    def test_reorder_bullet(self, state):
        state.reorder_bullet(0, 0, 2)
        assert highlights(state, 0) == ["a2", "a3", "a1"]

    def test_move_bullet_appends_to_target(self, state):
        state.move_bullet(0, 1, 1)
        assert highlights(state, 0) == ["a1", "a3"]
        assert highlights(state, 1) == ["b1", "a2"]

    def test_move_bullet_to_same_entry_is_noop(self, state):
        state.move_bullet(0, 1, 0)
        assert not state.can_undo

    def test_bad_bullet_index_is_noop(self, state):
        state.update_bullet(1, 5, "nope")
        state.remove_bullet(5, 0)
        assert not state.can_undo

    def test_bullets_in_other_sections(self, state):
        state.add_bullet(0, "Dean's list", section="education")
        assert highlights(state, 0, Section.EDUCATION) == ["Dean's list"]

    def test_section_without_bullets_is_noop(self, state):
        state.add_bullet(0, "text", section="skills")
        assert not state.can_undo


class TestExperienceSurgery:
    def test_split_entry(self, state):
        state.split_entry(0, 1)
        entries = state.entries("experience")
        assert len(entries) == 3
        assert entries[0].highlights == ["a1"]
        assert entries[1].position == "a2"
        assert entries[1].company == "Acme"
        assert entries[1].highlights == ["a3"]
        assert entries[1].id != entries[0].id
        assert entries[2].company == "Globex"

    def test_swap_position_company(self, state):
        state.swap_position_company(1)
        entry = state.entries("experience")[1]
        assert (entry.position, entry.company) == ("Globex", "Developer")

    def test_merge_experience_concatenates_bullets(self, state):
        state.merge_entries("experience", 0, 1)
        entries = state.entries("experience")
        assert len(entries) == 1
        assert entries[0].company == "Acme"
        assert entries[0].highlights == ["a1", "a2", "a3", "b1"]

    def test_merge_other_section_drops_second(self, state):
        state.add_entry("education", {"institution": "Community College"})
        state.merge_entries("education", 0, 1)
        assert [e.institution for e in state.entries("education")] == ["State University"]

    def test_merge_with_itself_is_noop(self, state):
        state.merge_entries("experience", 1, 1)
        assert not state.can_undo


class TestUnmatchedChunks:
    def test_skip(self, state):
        state.skip_unmatched_chunk(0)
        assert [c.start_offset for c in state.unmatched_chunks] == [120]

    def test_add_as_hobbies(self, state):
        state.add_unmatched_as(0, "hobbies")
        assert state.hobbies == ["Hiking", "Chess"]
        assert len(state.unmatched_chunks) == 1

    def test_add_as_summary_appends_line(self, state):
        state.add_unmatched_as(1, Section.SUMMARY)
        assert state.summary == "Backend engineer\nLed the chess club for two years as its president."

    def test_add_as_skills(self, state):
        state.add_unmatched_as(0, "skills")
        assert [c.category for c in state.entries("skills")] == ["Languages", "General"]

    def test_nothing_extracted_still_removes_chunk(self, state):
        state.add_unmatched_as(0, "contact")
        assert len(state.unmatched_chunks) == 1
        assert state.contact.first_name == "Jane"
        assert state.can_undo

    def test_unknown_section_or_index_is_noop(self, state):
        state.add_unmatched_as(0, "nonsense")
        state.add_unmatched_as(9, "summary")
        state.skip_unmatched_chunk(-1)
        assert len(state.unmatched_chunks) == 2
        assert not state.can_undo


class TestUndoRedo:
    def test_undo_restores_each_step(self, state):
        state.update_summary("first")
        state.remove_entry("experience", 0)
        assert state.undo() is True
        assert len(state.entries("experience")) == 2
        assert state.undo() is True
        assert state.summary == "Backend engineer"
        assert state.undo() is False

    def test_redo(self, state):
        state.swap_position_company(0)
        state.undo()
        assert state.can_redo
        assert state.redo() is True
        assert state.entries("experience")[0].position == "Acme"
        assert state.redo() is False

    def test_new_edit_clears_redo(self, state):
        state.update_summary("first")
        state.undo()
        state.update_summary("second")
        assert not state.can_redo

    def test_undo_restores_unmatched_chunks(self, state):
        state.add_unmatched_as(0, "hobbies")
        state.undo()
        assert len(state.unmatched_chunks) == 2
        assert state.hobbies == []

    def test_history_limit(self, parsed):
        state = ImportReviewState(parsed, history_limit=2)
        for text in ("one", "two", "three"):
            state.update_summary(text)
        assert state.undo() and state.undo()
        assert state.summary == "one"
        assert state.undo() is False


class TestConfidence:
    def test_complete_sections(self, state):
        for section in ("contact", "summary", "experience", "education", "skills"):
            assert state.get_section_confidence(section) is Confidence.COMPLETE

    def test_empty_and_unknown(self, state):
        assert state.get_section_confidence("projects") is Confidence.EMPTY
        assert state.get_section_confidence("hobbies") is Confidence.EMPTY
        assert state.get_section_confidence("nonsense") is Confidence.EMPTY

    def test_contact_missing_email(self, state):
        state.update_contact("email", "")
        assert state.get_section_confidence("contact") is Confidence.INCOMPLETE

    def test_experience_missing_company(self, state):
        state.update_entry("experience", 1, {"company": ""})
        assert state.get_section_confidence("experience") is Confidence.INCOMPLETE

    def test_degree_in_institution(self, state):
        state.update_entry("education", 0, {"institution": "Bachelor of Science"})
        assert state.get_section_confidence("education") is Confidence.INCOMPLETE

    def test_fragmented_skills(self, state):
        fragments = ["Wor", "ked", "on", "the", "proj"]
        state.add_entry("skills", {"category": "General", "items": [{"name": n} for n in fragments]})
        assert state.get_section_confidence("skills") is Confidence.INCOMPLETE

    def test_short_known_skills_are_not_fragments(self, state):
        names = ["Go", "SQL", "AWS", "Git", "CSS", "C#"]
        state.add_entry("skills", {"category": "Tools", "items": [{"name": n} for n in names]})
        assert state.get_section_confidence("skills") is Confidence.COMPLETE

    def test_placeholder_certification(self, state):
        state.add_entry(Section.CERTIFICATIONS, CertificationEntry(name="CKA", credential_id="abc123"))
        assert state.get_section_confidence("certifications") is Confidence.INCOMPLETE

    def test_named_projects(self, state):
        state.add_entry("projects", {"name": ""})
        assert state.get_section_confidence("projects") is Confidence.INCOMPLETE


class TestBuildPartial:
    def test_only_non_empty_sections(self, state):
        partial = state.build_partial_resume_data()
        assert partial.present_sections() == ["contact", "summary", "experience", "education", "skills"]
        assert partial.projects is None
        assert partial.hobbies is None

    def test_contact_left_out_without_name_or_email(self):
        state = ImportReviewState(PartialResumeData(contact=ContactData(phone="555-123-4567")))
        assert state.build_partial_resume_data().contact is None

    def test_reflects_edits(self, state):
        state.remove_entry("experience", 1)
        state.update_hobbies(["Chess"])
        partial = state.build_partial_resume_data()
        assert [e.company for e in partial.experience] == ["Acme"]
        assert partial.hobbies.items == ["Chess"]


class TestEntryWarnings:
    def test_warnings_follow_entries(self, state):
        assert [w.id for w in state.get_entry_warnings(0)] == ["0-no-dates"]
        assert state.get_entry_warnings(9) == []
        assert sorted(state.experience_warnings()) == [0, 1]

    def test_swap_action(self, state):
        state.update_entry("experience", 0, {"position": "Globex Corporation", "company": "Engineer"})
        warning = next(w for w in state.get_entry_warnings(0) if w.action is not None)
        state.apply_warning_action(warning)
        entry = state.entries("experience")[0]
        assert (entry.position, entry.company) == ("Engineer", "Globex Corporation")

    def test_split_action(self, state):
        state.update_entry("experience", 0, {"highlights": [f"Did thing {i}" for i in range(10)]})
        warning = next(w for w in state.get_entry_warnings(0) if w.action is not None)
        state.apply_warning_action(warning)
        experience = state.entries("experience")
        assert len(experience) == 3
        assert len(experience[0].highlights) == 5
        assert experience[1].position == "Did thing 5"

    def test_promote_bullet_action(self, state):
        state.update_entry("experience", 1, {"company": "", "highlights": ["Initech Software", "Built APIs"]})
        warning = next(w for w in state.get_entry_warnings(1) if w.action is not None)
        state.apply_warning_action(warning)
        entry = state.entries("experience")[1]
        assert entry.company == "Initech Software"
        assert entry.highlights == ["Built APIs"]
        state.undo()
        assert state.entries("experience")[1].company == ""

    def test_promote_bullet_keeps_existing_company(self, state):
        before = len(state.history.past)
        state.promote_bullet_to_company(0)
        assert state.entries("experience")[0].company == "Acme"
        assert len(state.history.past) == before

    def test_warning_without_action_is_ignored(self, state):
        before = len(state.history.past)
        state.apply_warning_action(state.get_entry_warnings(0)[0])
        assert len(state.history.past) == before
