"""SQLite persistence layer for newsdesk favorites."""

from __future__ import annotations

from pathlib import Path

from sqlmodel import Field, SQLModel, create_engine

SCHEMA_VERSION = 1


class FavoriteArticleRecord(SQLModel, table=True):
    """Persisted projection of an article the user chose to keep."""

    __tablename__ = "favorite_articles"

    id: str = Field(primary_key=True)
    title: str
    description: str | None = None
    url: str
    url_to_image: str | None = None
    published_at: str = Field(index=True)
    author: str | None = None
    content: str | None = None
    source_name: str | None = None


def create_engine_for_path(db_path: Path):
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )


def init_db(engine) -> None:
    SQLModel.metadata.create_all(engine)
    with engine.begin() as conn:
        version = conn.exec_driver_sql("PRAGMA user_version").scalar()
        if not version:
            conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")


def schema_version(engine) -> int:
    with engine.connect() as conn:
        return int(conn.exec_driver_sql("PRAGMA user_version").scalar() or 0)
