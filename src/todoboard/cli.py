#!/usr/bin/env python3
"""Todoboard CLI for day-to-day todo and label management."""

import argparse

import questionary
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from todoboard.config import config
from todoboard.errors import Duplicate
from todoboard.label import CreateLabel, Label, LabelRepository
from todoboard.logging_config import setup_logging
from todoboard.repositories import build_repositories
from todoboard.todo import CreateTodo, TodoEntity, TodoRepository, UpdateTodo

console = Console()


def format_labels(labels: list[Label]) -> str:
    return ", ".join(label.name for label in labels) or "-"


def list_todos(todo_repo: TodoRepository) -> None:
    """Print every todo with its labels."""
    todos = todo_repo.all()
    if not todos:
        console.print("[dim]No todos yet.[/]")
        return

    table = Table("ID", "Text", "Done", "Labels")
    for todo in todos:
        table.add_row(
            str(todo.id),
            todo.text,
            "[green]yes[/]" if todo.completed else "no",
            format_labels(todo.labels),
        )
    console.print(table)


def list_labels(label_repo: LabelRepository) -> None:
    labels = label_repo.all()
    if not labels:
        console.print("[dim]No labels yet.[/]")
        return

    table = Table("ID", "Name")
    for label in labels:
        table.add_row(str(label.id), label.name)
    console.print(table)


def add_label(label_repo: LabelRepository, name: str = None) -> Label | None:
    """Create a label, prompting for its name if not given."""
    if name is None:
        name = questionary.text("Label name:").ask()
        if name is None:
            console.print("[dim]Cancelled.[/]")
            return None

    try:
        payload = CreateLabel(name=name)
        label = label_repo.create(payload.name)
    except ValidationError as e:
        console.print(f"[red]{e.errors()[0]['msg']}.[/]")
        return None
    except Duplicate as e:
        console.print(f"[yellow]Label {name!r} already exists (id={e.id}).[/]")
        return None

    console.print(f"[green]Created label {label.name} (id={label.id}).[/]")
    return label


def add_todo(todo_repo: TodoRepository, label_repo: LabelRepository) -> TodoEntity | None:
    """Prompt for a todo's text and labels, then create it."""
    text = questionary.text("Todo:").ask()
    if text is None:
        console.print("[dim]Cancelled.[/]")
        return None

    label_ids = []
    labels = label_repo.all()
    if labels:
        label_ids = questionary.checkbox(
            "Labels:",
            choices=[questionary.Choice(title=label.name, value=label.id) for label in labels],
        ).ask() or []

    try:
        todo = todo_repo.create(CreateTodo(text=text, label_ids=label_ids))
    except ValidationError as e:
        console.print(f"[red]{e.errors()[0]['msg']}.[/]")
        return None

    console.print(f"[green]Created todo {todo.id}: {todo.text}[/]")
    return todo


def select_open_todo(todo_repo: TodoRepository) -> TodoEntity | None:
    """Prompt the user to select one of the todos not yet completed."""
    todos = [todo for todo in todo_repo.all() if not todo.completed]
    if not todos:
        console.print("[red]No open todos found.[/]")
        return None
    return questionary.select(
        "Select a todo:",
        choices=[
            questionary.Choice(title=f"{t.text} [{format_labels(t.labels)}]", value=t)
            for t in todos
        ],
    ).ask()


def complete_todo(todo_repo: TodoRepository) -> TodoEntity | None:
    """Mark a selected todo as completed."""
    todo = select_open_todo(todo_repo)
    if not todo:
        return None

    if not questionary.confirm(f"Mark {todo.text!r} as completed?").ask():
        console.print("[dim]Cancelled.[/]")
        return None

    todo = todo_repo.update(todo.id, UpdateTodo(completed=True))
    console.print(f"[green]Completed todo {todo.id}.[/]")
    return todo


def delete_label(label_repo: LabelRepository) -> bool:
    """Delete a selected label; it is removed from every todo carrying it."""
    labels = label_repo.all()
    if not labels:
        console.print("[red]No labels found.[/]")
        return False

    label = questionary.select(
        "Select a label:",
        choices=[questionary.Choice(title=label.name, value=label) for label in labels],
    ).ask()
    if label is None:
        console.print("[dim]Cancelled.[/]")
        return False

    console.print(f"[yellow]Will delete label [bold]{label.name}[/] and detach it from all todos.[/]")
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return False

    label_repo.delete(label.id)
    console.print(f"[green]Deleted label {label.name}.[/]")
    return True


def main(argv: list[str] = None):
    parser = argparse.ArgumentParser(description="Todoboard CLI")
    parser.add_argument(
        "--backend",
        choices=["postgres", "memory"],
        default=config.repository_backend,
        help="Repository backend to use",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-todos", help="List todos with their labels")
    subparsers.add_parser("list-labels", help="List labels")
    add_label_parser = subparsers.add_parser("add-label", help="Create a label")
    add_label_parser.add_argument("name", nargs="?", help="Label name (prompted if omitted)")
    subparsers.add_parser("add-todo", help="Create a todo")
    subparsers.add_parser("complete-todo", help="Mark a todo as completed")
    subparsers.add_parser("delete-label", help="Delete a label")

    args = parser.parse_args(argv)

    setup_logging(config.log_level, config.log_file)
    todo_repo, label_repo = build_repositories(args.backend)

    if args.command == "list-todos":
        list_todos(todo_repo)
    elif args.command == "list-labels":
        list_labels(label_repo)
    elif args.command == "add-label":
        add_label(label_repo, args.name)
    elif args.command == "add-todo":
        add_todo(todo_repo, label_repo)
    elif args.command == "complete-todo":
        complete_todo(todo_repo)
    elif args.command == "delete-label":
        delete_label(label_repo)


if __name__ == "__main__":
    main()
