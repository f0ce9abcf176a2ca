from typing import TypedDict


class EmailRecipient(TypedDict):
    email: str


REPLY_PREFIX = "Re:"


class MessageUtils:
    """Helpers for shaping outbound messages."""

    @staticmethod
    def build_email_address(email_str: str | None) -> list[EmailRecipient] | None:
        """
        Convert a comma separated address string into recipient records.

        "a@x.com, b@y.com" -> [{"email": "a@x.com"}, {"email": "b@y.com"}]. Empty input yields
        None and empty entries (e.g. after a trailing comma) are dropped.
        """
        if not email_str:
            return None

        return [{"email": email.strip()} for email in email_str.split(",") if email.strip()]

    @staticmethod
    def build_subject(subject: str | None, reply_to_message_id: str | None) -> str:
        """Prefix replies with "Re: " unless the subject already carries it."""
        subject = subject or ""
        if reply_to_message_id and REPLY_PREFIX not in subject:
            return f"{REPLY_PREFIX} {subject}"
        return subject
