from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from devmatch.config import build_sqlalchemy_db_url, settings  # noqa: E402
from devmatch.database import Base, SessionLocal, engine  # noqa: E402
from devmatch.models.project import Project, ProjectMember  # noqa: E402
from devmatch.models.user import User  # noqa: E402
from devmatch.utils.password_hash import hash_password  # noqa: E402


DEMO_USERS = [
    ("ada@devmatch.local", "Ada", "Backend engineer", ["Python", "FastAPI", "PostgreSQL"]),
    ("linus@devmatch.local", "Linus", "Systems programmer", ["C", "Rust", "Linux"]),
    ("grace@devmatch.local", "Grace", "Full stack developer", ["JavaScript", "React", "Node.js", "Python"]),
    ("alan@devmatch.local", "Alan", "ML engineer", ["Python", "PyTorch", "SQL"]),
]

DEMO_PROJECTS = [
    ("ada@devmatch.local", "Open source job board", "A job board for OSS maintainers.", ["Python", "FastAPI", "React"]),
    ("grace@devmatch.local", "Hackathon team finder", "Match hackers by skills.", ["JavaScript", "React", "Node.js"]),
    ("alan@devmatch.local", "Notebook linter", "Static checks for notebooks.", ["Python", "SQL"]),
]


def _ensure_tables() -> None:
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed demo developers and projects for local development.")
    parser.add_argument("--password", default="DevMatch123", help="Password for every demo account")
    args = parser.parse_args(argv)

    _ensure_tables()

    created_users = 0
    created_projects = 0
    with SessionLocal() as db:
        by_email: dict[str, User] = {}
        for email, name, title, skills in DEMO_USERS:
            user = db.query(User).filter(User.email == email).first()
            if user is None:
                user = User(
                    email=email,
                    password=hash_password(args.password),
                    name=name,
                    title=title,
                    skills=skills,
                    links={},
                )
                db.add(user)
                created_users += 1
            by_email[email] = user
        db.commit()

        for owner_email, title, description, skills in DEMO_PROJECTS:
            if db.query(Project).filter(Project.title == title).first() is not None:
                continue
            owner = by_email[owner_email]
            project = Project(title=title, description=description, required_skills=skills, owner_id=owner.id)
            project.members.append(ProjectMember(user_id=owner.id, role="owner"))
            db.add(project)
            created_projects += 1
        db.commit()

    print(f"created users={created_users} projects={created_projects}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
