"""
Reset the database to a known demo state. Run from project root:
  python -m app.scripts.seed

Deletes every user, session, theory and comment, then creates:
  admin@conspira.local / admin123 (admin)
  user@conspira.local  / user123  (user)
and a handful of sample theories with comments.
"""
import logging
import sys
from typing import Any

from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.core.security import BCRYPT_ROUNDS, hash_password
from app.models import Comment, SessionRecord, Theory, User
from app.schemas.auth import UserCreate
from app.schemas.theory import TheoryCreate
from app.services.theories import unique_slug

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

SEED_USERS: list[dict[str, str]] = [
    {
        "email": "admin@conspira.local",
        "display_name": "Theory Administrator",
        "password": "admin123",
        "role": "admin",
    },
    {
        "email": "user@conspira.local",
        "display_name": "Anonymous Skeptic",
        "password": "user123",
        "role": "user",
    },
]

SEED_THEORIES: list[dict[str, Any]] = [
    {
        "title": "Park ducks are government drones in disguise",
        "summary": "Urban ducks are surveillance robots that recharge while they 'sleep' with their heads under a wing.",
        "content": (
            "City ducks never seem truly afraid of people, unlike their wild cousins. "
            "The head-under-the-wing pose is a solar charging mode, the quack is a mesh "
            "network protocol, and following anyone with bread is facial recognition at work. "
            "Nobody has ever seen a duckling in a city park, because the units ship as adults."
        ),
        "complexity_level": "medium",
        "tags": ["surveillance", "animals", "parks"],
        "comments": [
            ("Theory Administrator", "Confirmed: I have never seen a duckling in a city garden."),
            ("Anonymous Skeptic", "So the duck that followed me to my car was taking notes."),
        ],
    },
    {
        "title": "Pigeons hold secret meetings to pick freshly washed cars",
        "summary": "Pigeons organise in coordinated cells and target freshly washed cars as a priority.",
        "content": (
            "Wash your car and within a day a pigeon finds it. Sentinel pigeons spot the shine "
            "from the air and report coordinates to bomber pigeons through coded cooing. Groups "
            "idling on rooftops are in fact holding tactical briefings, led by the largest and "
            "greyest birds acting as regional commanders."
        ),
        "complexity_level": "medium",
        "tags": ["animals", "conspiracy", "cities"],
        "comments": [
            ("Frustrated Driver", "Explains why it only happens before important meetings."),
        ],
    },
    {
        "title": "Missing socks slip into another dimension",
        "summary": "Washing machines open micro-portals that swallow exactly one sock from each pair.",
        "content": (
            "High spin speeds combined with the low density of sock fabric tear the fabric of "
            "space-time just long enough to pull one sock through. The portal is unstable and "
            "closes after the first object, which is why only one sock ever disappears, and "
            "always the favourite one."
        ),
        "complexity_level": "medium",
        "tags": ["physics", "home", "dimensions"],
        "comments": [
            ("Desperate Student", "My lucky exam sock has clearly been promoted."),
        ],
    },
    {
        "title": "Smoke alarms know exactly when you fall asleep",
        "summary": "Smoke detectors wait until you are in deep sleep before chirping about a low battery.",
        "content": (
            "The low-battery chirp never happens during the day. Hidden sensors detect deep sleep "
            "and only then start the thirty-second chirp cycle, an interval tuned to be too short "
            "to fall back asleep and too long to predict. Premium batteries sell themselves."
        ),
        "complexity_level": "medium",
        "tags": ["technology", "sleep"],
        "comments": [
            ("Chirp Victim", "Written at 3:12 after the third chirp."),
        ],
    },
    {
        "title": "Office coffee machines train secret productivity models",
        "summary": "Office coffee machines record what you drink and when, to predict productivity peaks.",
        "content": (
            "Every choice of strength and every timestamp is logged and shipped to a central "
            "system that builds productivity profiles: who performs after one espresso and who "
            "needs two to be functional. Meeting schedules are then quietly tuned around them."
        ),
        "complexity_level": "high",
        "tags": ["office", "data", "productivity"],
        "comments": [
            ("Caffeinated Intern", "If the machine judges me by the third coffee, we are doomed."),
        ],
    },
    {
        "title": "Meeting room clocks add tiny delays to important decisions",
        "summary": "Some meeting room clocks are calibrated to create small but constant delays.",
        "content": (
            "Clocks in meeting rooms are not slightly fast by accident. Small systematic offsets "
            "at certain times of day make decisions happen in a hurry, and over weeks that sum "
            "of small rushes pushes whole projects towards less considered outcomes."
        ),
        "complexity_level": "low",
        "tags": ["time", "meetings", "organisations"],
        "comments": [],
    },
]


def _create_users(db: Session, rounds: int) -> list[User]:
    users = []
    for raw in SEED_USERS:
        body = UserCreate(**raw)
        users.append(
            User(
                email=body.email,
                display_name=body.display_name,
                password_hash=hash_password(body.password, rounds=rounds),
                role=body.role,
            )
        )
    db.add_all(users)
    db.flush()
    return users


def _create_theories(db: Session) -> list[Theory]:
    theories = []
    for raw in SEED_THEORIES:
        body = TheoryCreate(**{k: v for k, v in raw.items() if k != "comments"})
        theory = Theory(
            title=body.title,
            slug=unique_slug(db, body.title),
            summary=body.summary,
            content=body.content,
            complexity_level=body.complexity_level,
            tags=list(body.tags),
            comments=[Comment(author_name=a, text=t) for a, t in raw.get("comments", [])],
        )
        db.add(theory)
        # Flush per theory so unique_slug sees earlier rows.
        db.flush()
        theories.append(theory)
    return theories


def seed_database(db: Session, rounds: int = BCRYPT_ROUNDS) -> tuple[list[User], list[Theory]]:
    """Wipe all tables and insert the demo users and theories. Commits."""
    db.query(Comment).delete(synchronize_session=False)
    db.query(Theory).delete(synchronize_session=False)
    db.query(SessionRecord).delete(synchronize_session=False)
    db.query(User).delete(synchronize_session=False)
    users = _create_users(db, rounds)
    theories = _create_theories(db)
    db.commit()
    return users, theories


def main() -> int:
    db = SessionLocal()
    try:
        users, theories = seed_database(db)
        for u in users:
            logger.info("Seeded user: %s <%s> (role: %s)", u.display_name, u.email, u.role)
        for t in theories:
            logger.info("Seeded theory: %s [%s]", t.title, t.complexity_level)
        logger.info("Seed completed: users=%s theories=%s", len(users), len(theories))
        return 0
    except Exception as e:
        db.rollback()
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
