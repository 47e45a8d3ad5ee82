# scripts/seed.py
from __future__ import annotations

import argparse
import os

from sqlalchemy.orm import Session

from student_registry.core.logging import configure_logging, get_logger
from student_registry.db import SessionLocal
from student_registry.models.student import Student

# ---------------- Configurable via env ----------------
SEED_COUNT = int(os.getenv("SEED_COUNT", "7"))

# ---------------- Sample data ----------------
STUDENTS_DATA = [
    ("Alice Lima", "alice.lima@gmail.com", "9876543210"),
    ("Bruno Alves", "bruno.alves@gmail.com", "9123456780"),
    ("Clara Dias", "clara.dias@gmail.com", "9988776655"),
    ("Diego Nogueira", "diego.n@gmail.com", "9000011111"),
    ("Eduarda Pires", "eduarda_pires@gmail.com", "9555512345"),
    ("Felipe Costa", "felipe.costa@gmail.com", "9444423456"),
    ("Gabriela Rocha", "gabi.rocha@gmail.com", "9333334567"),
    ("Heitor Souza", "heitor1990@gmail.com", "9222245678"),
    ("Isabela Martins", "isa.martins@gmail.com", "9111156789"),
    ("Joao Pereira", "joao.pereira@gmail.com", "9012345678"),
]


def seed_students(db: Session, count: int) -> int:
    """Insert the first ``count`` sample students, skipping ids already taken."""
    created = 0
    for idx, (name, email, mobile) in enumerate(STUDENTS_DATA[:count], start=1):
        if db.get(Student, idx) is not None:
            continue
        db.add(Student(id=idx, name=name, email=email, mobile=mobile))
        created += 1
    db.commit()
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample students.")
    parser.add_argument("--count", type=int, default=SEED_COUNT)
    args = parser.parse_args()

    configure_logging(json=False)
    with SessionLocal() as db:
        created = seed_students(db, max(0, args.count))
    get_logger().info("seed.done", created=created)


if __name__ == "__main__":
    main()
