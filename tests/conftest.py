"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "RESUME_ATS_LOG_LEVEL",
        "RESUME_ATS_INDUSTRY",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers bound to a previous test's captured streams."""
    yield
    logger = logging.getLogger("resume_ats")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


FULL_RESUME_TEXT = """John Doe
john@example.com
555-123-4567
https://www.linkedin.com/in/johndoe

Summary
Experienced software engineer with 5+ years building web applications and leading small teams.

Experience
Senior Developer at Tech Corp
Jan 2020 - Present
- Led team of 8 engineers
- Developed new dashboard that increased user engagement by 35%

Full Stack Developer at StartupXYZ
Jun 2017 - Dec 2019
- Built RESTful APIs serving 100,000+ daily requests
* Implemented CI/CD pipeline

Education
Bachelor of Science in Computer Science
MIT
2013 - 2017
GPA: 3.8

Skills
Programming: JavaScript, TypeScript, Python
Frameworks: React, Node.js
"""


@pytest.fixture
def full_resume_text() -> str:
    """A plain-text resume with contact, summary, experience, education and skills."""
    return FULL_RESUME_TEXT
