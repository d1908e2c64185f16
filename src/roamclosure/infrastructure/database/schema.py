"""SQLAlchemy Core table definitions for the org-roam (v2) database.

The schema is owned by org-roam; only the tables the closure queries read
are declared here. Every TEXT value is stored as an elisp printed string,
including the link ``type`` column (``'"id"'``, ``'"file"'``).
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, MetaData, Table, Text

from roamclosure.domain.files import encode_elisp_string

metadata = MetaData()

files = Table(
    "files",
    metadata,
    Column("file", Text, primary_key=True),
    Column("title", Text),
    Column("hash", Text, nullable=False),
    Column("atime", Text, nullable=False),
    Column("mtime", Text, nullable=False),
)

nodes = Table(
    "nodes",
    metadata,
    Column("id", Text, primary_key=True),
    Column("file", Text, ForeignKey("files.file", ondelete="CASCADE"), nullable=False),
    Column("level", Integer, nullable=False),
    Column("pos", Integer, nullable=False),
    Column("todo", Text),
    Column("priority", Text),
    Column("scheduled", Text),
    Column("deadline", Text),
    Column("title", Text),
    Column("properties", Text),
    Column("olp", Text),
)

links = Table(
    "links",
    metadata,
    Column("pos", Integer, nullable=False),
    Column("source", Text, ForeignKey("nodes.id", ondelete="CASCADE"), nullable=False),
    Column("dest", Text, nullable=False),
    Column("type", Text, nullable=False),
    Column("properties", Text, nullable=False),
)

# Stored values of links.type
ID_LINK = encode_elisp_string("id")
FILE_LINK = encode_elisp_string("file")
