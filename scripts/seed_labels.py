"""Seed initial labels into the database."""
from todoboard.errors import Duplicate
from todoboard.label import PostgresLabelRepository

INITIAL_LABELS = ["work", "home", "errand", "urgent"]


def main():
    label_repo = PostgresLabelRepository()

    for name in INITIAL_LABELS:
        try:
            label = label_repo.create(name)
        except Duplicate as e:
            print(f"Skipping {name} - already exists (id={e.id})")
            continue

        print(f"Created: {label.name} (id={label.id})")


if __name__ == "__main__":
    main()
