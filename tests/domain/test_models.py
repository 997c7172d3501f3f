"""Tests for the resume data model."""

from resume_ats.domain.models import (
    ARRAY_SECTIONS,
    MAX_HIGHLIGHT_LENGTH,
    MAX_SUMMARY_LENGTH,
    ContactData,
    ExperienceEntry,
    PartialResumeData,
    ResumeData,
    Section,
    SummaryData,
    merge_partial_into,
)


class TestSection:
    def test_lookup_forms(self):
        assert Section.lookup("experience") is Section.EXPERIENCE
        assert Section.lookup("customSections") is Section.CUSTOM_SECTIONS
        assert Section.lookup("custom_sections") is Section.CUSTOM_SECTIONS
        assert Section.lookup("Interests") is Section.HOBBIES
        assert Section.lookup(Section.SKILLS) is Section.SKILLS

    def test_lookup_unknown(self):
        assert Section.lookup("nonsense") is None
        assert Section.lookup(42) is None

    def test_array_sections(self):
        assert Section.CONTACT not in ARRAY_SECTIONS
        assert Section.SUMMARY not in ARRAY_SECTIONS
        assert Section.HOBBIES not in ARRAY_SECTIONS
        assert len(ARRAY_SECTIONS) == 13


class TestEntries:
    def test_ids_are_unique(self):
        assert ExperienceEntry().id != ExperienceEntry().id

    def test_highlights_clipped(self):
        entry = ExperienceEntry(highlights=["x" * (MAX_HIGHLIGHT_LENGTH + 100)])
        assert len(entry.highlights[0]) == MAX_HIGHLIGHT_LENGTH

    def test_summary_clipped(self):
        assert len(SummaryData(text="y" * (MAX_SUMMARY_LENGTH + 1)).text) == MAX_SUMMARY_LENGTH


class TestPartialResumeData:
    def test_present_sections_and_dict(self):
        partial = PartialResumeData(contact=ContactData(first_name="Jane"), experience=[])
        assert partial.present_sections() == ["contact", "experience"]
        assert set(partial.to_dict()) == {"contact", "experience"}


class TestMergePartialInto:
    def test_contact_fields_merge_individually(self):
        base = ResumeData(contact=ContactData(email="old@example.com", phone="555-000-0000"))
        partial = PartialResumeData(contact=ContactData(first_name="Jane", email="new@example.com"))
        merged = merge_partial_into(base, partial)
        assert merged.contact.first_name == "Jane"
        assert merged.contact.email == "new@example.com"
        assert merged.contact.phone == "555-000-0000"
        assert base.contact.email == "old@example.com"

    def test_present_sections_replace_with_fresh_ids(self):
        original = ExperienceEntry(company="Acme")
        base = ResumeData(experience=[ExperienceEntry(company="Old Co")], summary=SummaryData(text="Kept"))
        merged = merge_partial_into(base, PartialResumeData(experience=[original]))
        assert [e.company for e in merged.experience] == ["Acme"]
        assert merged.experience[0].id != original.id
        assert merged.summary.text == "Kept"

    def test_empty_summary_does_not_overwrite(self):
        base = ResumeData(summary=SummaryData(text="Kept"))
        merged = merge_partial_into(base, PartialResumeData(summary=SummaryData(text="")))
        assert merged.summary.text == "Kept"
