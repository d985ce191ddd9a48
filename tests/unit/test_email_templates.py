"""Tests for status change email rendering."""

from datetime import datetime

import pytest

from src.projecthub.core.notifications import (
    STATUS_COLORS,
    STATUS_MESSAGES,
    render_status_change_email,
    status_change_subject,
    status_label,
)
from src.projecthub.models import ProjectStatus

pytestmark = pytest.mark.unit


class TestStatusLabel:
    def test_hyphenated_status(self):
        assert status_label(ProjectStatus.REVISION_REQUIRED) == "Revision Required"
        assert status_label(ProjectStatus.UNDER_REVIEW) == "Under Review"

    def test_plain_string(self):
        assert status_label("approved") == "Approved"


class TestStatusChangeEmail:
    def test_subject(self):
        assert status_change_subject("Green Roof") == "Project Status Update: Green Roof"

    def test_every_status_has_color_and_message(self):
        for status in ProjectStatus:
            assert status in STATUS_COLORS
            assert status in STATUS_MESSAGES

    def test_renders_status_and_message(self):
        html = render_status_change_email(
            project_title="Green Roof",
            new_status=ProjectStatus.APPROVED,
            comment="",
            reviewer_name="Dr. Smith",
            reviewed_at=datetime(2024, 3, 1, 12, 0),
        )
        assert "Green Roof" in html
        assert "Approved" in html
        assert STATUS_MESSAGES[ProjectStatus.APPROVED] in html
        assert STATUS_COLORS[ProjectStatus.APPROVED] in html
        assert "Reviewed by: Dr. Smith" in html
        assert "Date: 2024-03-01" in html
        assert "Reviewer Comments:" not in html

    def test_comment_block_present_when_commented(self):
        html = render_status_change_email(
            project_title="Green Roof",
            new_status=ProjectStatus.REVISION_REQUIRED,
            comment="Please expand\nthe budget",
            reviewer_name="Dr. Smith",
        )
        assert "Reviewer Comments:" in html
        assert "Please expand<br>the budget" in html

    def test_values_are_escaped(self):
        html = render_status_change_email(
            project_title="<script>alert(1)</script>",
            new_status=ProjectStatus.REJECTED,
            comment="<b>bad</b>",
            reviewer_name="O'Brien & Co",
        )
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&lt;b&gt;bad&lt;/b&gt;" in html
        assert "O&#x27;Brien &amp; Co" in html

    def test_project_link(self):
        html = render_status_change_email(
            project_title="Green Roof",
            new_status=ProjectStatus.UNDER_REVIEW,
            comment="",
            reviewer_name="Dr. Smith",
            project_url="https://app.test/projects/123",
        )
        assert 'href="https://app.test/projects/123"' in html
