"""Unit tests for boundary validation in app.schemas."""

import unittest

from pydantic import ValidationError

from app.schemas.auth import LoginRequest, UserCreate
from app.schemas.theory import CommentCreate, TheoryCreate, TheoryUpdate

CONTENT = "A sufficiently long body of text for a theory."


class TestUserCreate(unittest.TestCase):
    """Emails are trimmed and lower-cased; names are trimmed; roles are closed."""

    def test_normalizes_email_and_display_name(self) -> None:
        body = UserCreate(email="  Ana@X.COM ", display_name="  Ana  ", password="secret123")
        self.assertEqual(body.email, "ana@x.com")
        self.assertEqual(body.display_name, "Ana")
        self.assertEqual(body.role, "user")

    def test_short_fields_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            UserCreate(email="a@b", display_name="Ana", password="secret123")
        with self.assertRaises(ValidationError):
            UserCreate(email="ana@x.com", display_name=" A ", password="secret123")
        with self.assertRaises(ValidationError):
            UserCreate(email="ana@x.com", display_name="Ana", password="123")

    def test_unknown_role_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            UserCreate(email="ana@x.com", display_name="Ana", password="secret123", role="root")


class TestLoginRequest(unittest.TestCase):
    def test_email_normalized(self) -> None:
        self.assertEqual(LoginRequest(email=" ADMIN@Conspira.local", password="x").email, "admin@conspira.local")


class TestTheorySchemas(unittest.TestCase):
    """Theory input is trimmed; tags are normalized and de-duplicated."""

    def test_tags_normalized(self) -> None:
        body = TheoryCreate(
            title="  Ducks  ",
            summary="Ducks are drones, apparently.",
            content=CONTENT,
            tags=[" Parks", "parks", "", "ANIMALS"],
        )
        self.assertEqual(body.title, "Ducks")
        self.assertEqual(body.tags, ["parks", "animals"])
        self.assertEqual(body.complexity_level, "medium")

    def test_invalid_complexity_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            TheoryCreate(
                title="Ducks",
                summary="Ducks are drones, apparently.",
                content=CONTENT,
                complexity_level="extreme",
            )

    def test_update_leaves_missing_fields_unset(self) -> None:
        body = TheoryUpdate(summary="A brand new summary text.")
        self.assertEqual(body.model_dump(exclude_unset=True), {"summary": "A brand new summary text."})

    def test_comment_text_trimmed_and_bounded(self) -> None:
        self.assertEqual(CommentCreate(text="  hi there ").text, "hi there")
        with self.assertRaises(ValidationError):
            CommentCreate(text=" x ")


if __name__ == "__main__":
    unittest.main()
