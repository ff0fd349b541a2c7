"""Tests for the notice e-mail template."""

from services.notice import (
    DISCLAIMER,
    NO_CLAUSES_PLACEHOLDER,
    normalize_lines,
    quote_clauses,
    render_notice_email,
)


class TestNoticeEmail:
    """Tests for render_notice_email."""

    def test_body_layout(self):
        """Test headers, quoted clauses and disclaimer."""
        email = render_notice_email(
            to=" landlord@example.com ",
            sender="tenant@example.com",
            purpose="termination of lease",
            clauses=[(2, "Either party may terminate\r\non 30 days notice.")],
        )

        assert email.to == "landlord@example.com"
        assert email.subject == "Notice regarding: termination of lease"
        assert email.body.startswith(
            "To: landlord@example.com\n"
            "From: tenant@example.com\n"
            "Subject: Notice regarding: termination of lease\n\n"
            "Hello,\n\n"
            "This email provides notice regarding: termination of lease.\n\n"
        )
        assert 'Page 2:\n"""\nEither party may terminate\non 30 days notice.\n"""' in email.body
        assert email.body.endswith(f"Sincerely,\ntenant@example.com\n\n---\n{DISCLAIMER}")

    def test_custom_subject(self):
        """Test an explicit subject is used as given."""
        email = render_notice_email(
            to="a@b.co", sender="c@d.co", purpose="renewal", subject="  Renewal  "
        )
        assert email.subject == "Renewal"

    def test_no_clauses(self):
        """Test the placeholder when nothing is quoted."""
        email = render_notice_email(to="a@b.co", sender="c@d.co", purpose="renewal")
        assert NO_CLAUSES_PLACEHOLDER in email.body

    def test_incomplete_clauses_skipped(self):
        """Test clauses without page or text are left out."""
        quoted = quote_clauses([(None, "text"), (3, "   "), (4, "kept")])
        assert quoted == 'Page 4:\n"""\nkept\n"""'

    def test_normalize_lines(self):
        """Test blank-line runs squeeze to one."""
        assert normalize_lines("a\r\n\r\n\r\n\r\nb\n") == "a\n\nb"
