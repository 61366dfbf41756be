"""Tests for app.services.theories: slugs, CRUD and comments against SQLite."""

import unittest
from unittest.mock import patch

from sqlalchemy.exc import IntegrityError

from app.models import Comment, Theory
from app.schemas.theory import TheoryCreate, TheoryUpdate
from app.services.theories import (
    CommentNotFoundError,
    SLUG_COMMIT_ATTEMPTS,
    TheoryNotFoundError,
    add_comment,
    create_theory,
    delete_comment,
    delete_theory,
    get_theory,
    get_theory_by_slug,
    list_theories,
    slugify,
    update_theory,
)
from tests.support import TempDatabase


def _body(title: str = "Park ducks are drones", **kwargs: object) -> TheoryCreate:
    defaults = {
        "summary": "Ducks recharge while they sleep.",
        "content": "City ducks are surveillance units with solar feathers.",
        "tags": ["animals", "parks"],
    }
    defaults.update(kwargs)
    return TheoryCreate(title=title, **defaults)


class TestSlugify(unittest.TestCase):
    """Accents removed, punctuation dropped, whitespace and hyphens collapsed."""

    def test_accents_and_spaces(self) -> None:
        self.assertEqual(
            slugify("Teoria dos semáforos empáticos"), "teoria-dos-semaforos-empaticos"
        )

    def test_leading_space_and_punctuation(self) -> None:
        self.assertEqual(slugify(" Chips de café na água!"), "chips-de-cafe-na-agua")

    def test_repeated_hyphens_collapsed(self) -> None:
        self.assertEqual(slugify("Ducks -- are  drones"), "ducks-are-drones")

    def test_title_without_slug_characters(self) -> None:
        self.assertEqual(slugify("???"), "theory")


class TestTheoryCrud(unittest.TestCase):
    def setUp(self) -> None:
        self.database = TempDatabase()
        self.db = self.database.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        self.database.close()

    def test_create_and_fetch_by_slug(self) -> None:
        theory = create_theory(self.db, _body())
        self.assertEqual(theory.slug, "park-ducks-are-drones")
        self.assertEqual(get_theory_by_slug(self.db, theory.slug).id, theory.id)

    def test_duplicate_titles_get_numbered_slugs(self) -> None:
        first = create_theory(self.db, _body())
        second = create_theory(self.db, _body())
        third = create_theory(self.db, _body())
        self.assertEqual(
            [first.slug, second.slug, third.slug],
            ["park-ducks-are-drones", "park-ducks-are-drones-2", "park-ducks-are-drones-3"],
        )

    def test_create_retries_when_slug_is_taken_between_check_and_commit(self) -> None:
        create_theory(self.db, _body())
        # Another writer committed the same slug after the uniqueness check.
        with patch(
            "app.services.theories.unique_slug",
            side_effect=["park-ducks-are-drones", "park-ducks-are-drones-2"],
        ):
            with self.assertLogs("app.services.theories", level="WARNING"):
                second = create_theory(self.db, _body())
        self.assertEqual(second.slug, "park-ducks-are-drones-2")
        self.assertEqual(self.db.query(Theory).count(), 2)

    def test_rename_retries_when_slug_is_taken_between_check_and_commit(self) -> None:
        create_theory(self.db, _body("Pigeons plan attacks"))
        other = create_theory(self.db, _body())
        with patch(
            "app.services.theories.unique_slug",
            side_effect=["pigeons-plan-attacks", "pigeons-plan-attacks-2"],
        ):
            with self.assertLogs("app.services.theories", level="WARNING"):
                updated = update_theory(
                    self.db, other.id, TheoryUpdate(title="Pigeons plan attacks")
                )
        self.assertEqual(updated.slug, "pigeons-plan-attacks-2")
        self.assertEqual(updated.title, "Pigeons plan attacks")

    def test_create_gives_up_after_repeated_collisions(self) -> None:
        create_theory(self.db, _body())
        with patch(
            "app.services.theories.unique_slug", return_value="park-ducks-are-drones"
        ) as slug:
            with self.assertLogs("app.services.theories", level="WARNING"):
                with self.assertRaises(IntegrityError):
                    create_theory(self.db, _body())
        self.assertEqual(slug.call_count, SLUG_COMMIT_ATTEMPTS)
        self.assertEqual(self.db.query(Theory).count(), 1)

    def test_list_filters_by_tag(self) -> None:
        create_theory(self.db, _body("Ducks", tags=["animals"]))
        create_theory(self.db, _body("Clocks", tags=["time"]))
        self.assertEqual({t.title for t in list_theories(self.db)}, {"Ducks", "Clocks"})
        self.assertEqual([t.title for t in list_theories(self.db, tag="TIME")], ["Clocks"])

    def test_update_title_regenerates_slug(self) -> None:
        theory = create_theory(self.db, _body())
        updated = update_theory(self.db, theory.id, TheoryUpdate(title="Pigeons plan attacks"))
        self.assertEqual(updated.slug, "pigeons-plan-attacks")
        self.assertEqual(updated.summary, "Ducks recharge while they sleep.")

    def test_update_same_title_keeps_slug(self) -> None:
        theory = create_theory(self.db, _body())
        updated = update_theory(
            self.db, theory.id, TheoryUpdate(title="Park ducks are drones", complexity_level="high")
        )
        self.assertEqual(updated.slug, "park-ducks-are-drones")
        self.assertEqual(updated.complexity_level, "high")

    def test_missing_theory_raises(self) -> None:
        with self.assertRaises(TheoryNotFoundError):
            get_theory(self.db, "missing")
        with self.assertRaises(TheoryNotFoundError):
            get_theory_by_slug(self.db, "missing")
        with self.assertRaises(TheoryNotFoundError):
            update_theory(self.db, "missing", TheoryUpdate(title="Whatever title"))

    def test_delete_removes_comments(self) -> None:
        theory = create_theory(self.db, _body())
        add_comment(self.db, theory, "Ana", "Seen one today.")
        delete_theory(self.db, theory.id)
        self.assertEqual(self.db.query(Comment).count(), 0)
        with self.assertRaises(TheoryNotFoundError):
            get_theory(self.db, theory.id)

    def test_comments_added_and_deleted(self) -> None:
        theory = create_theory(self.db, _body())
        comment = add_comment(self.db, theory, "Ana", "Seen one today.")
        self.assertEqual(comment.author_name, "Ana")
        self.db.refresh(theory)
        self.assertEqual([c.text for c in theory.comments], ["Seen one today."])
        delete_comment(self.db, theory.id, comment.id)
        with self.assertRaises(CommentNotFoundError):
            delete_comment(self.db, theory.id, comment.id)


if __name__ == "__main__":
    unittest.main()
