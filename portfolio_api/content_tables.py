"""
content_tables.py — Declarative map of the portfolio content tables.

Every generated route (public reads, admin CRUD) is driven from CONTENT_TABLES,
so adding a table here exposes it with the same contract as the others.

Business Rules:
- Public lists are ordered ascending, admin lists descending (newest first)
- `about` is a singleton row addressed by ABOUT_ROW_ID, never listed
- `messages` is write-only for visitors; admins can only list and delete

Called by: routers/public.py, routers/admin.py
"""

from __future__ import annotations

from dataclasses import dataclass

ABOUT_TABLE = "about"
ABOUT_ROW_ID = 1
MESSAGES_TABLE = "messages"


@dataclass(frozen=True)
class ContentTable:
    name: str
    order_column: str = "id"
    public_read: bool = True
    admin_crud: bool = True
    delete_message: str = "Deleted successfully"


CONTENT_TABLES: tuple[ContentTable, ...] = (
    ContentTable("skills"),
    ContentTable("projects"),
    ContentTable("blogs"),
    ContentTable("experience"),
    ContentTable("testimonials"),
    ContentTable("services"),
    ContentTable(
        MESSAGES_TABLE,
        order_column="created_at",
        public_read=False,
        admin_crud=False,
        delete_message="Message deleted",
    ),
)


def public_tables() -> list[ContentTable]:
    return [t for t in CONTENT_TABLES if t.public_read]


def admin_tables() -> list[ContentTable]:
    """Tables that get the full generated list/create/update/delete set."""
    return [t for t in CONTENT_TABLES if t.admin_crud]


def get_table(name: str) -> ContentTable:
    for table in CONTENT_TABLES:
        if table.name == name:
            return table
    raise KeyError(name)
