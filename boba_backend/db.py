"""
Database abstraction for Postgres and an in-memory test implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional, Protocol

from sqlalchemy import JSON, Boolean, Column, Float, Integer, String, create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class DbClient(Protocol):
    """Interface for database access."""

    def get_boards(self, firebase_id: str | None = None) -> Optional[list["BoardRecord"]]:
        ...

    def get_user_settings(self, firebase_id: str) -> list[dict]:
        ...

    def get_realm_settings(self, realm_slug: str) -> Optional[dict]:
        ...

    def save_board(self, board: "BoardRecord") -> None:
        ...

    def save_board_user_state(self, state: "BoardUserState") -> None:
        ...

    def save_user_settings(self, firebase_id: str, settings: list[dict]) -> None:
        ...

    def save_realm_settings(self, realm_slug: str, settings: dict) -> None:
        ...


@dataclass
class BoardRecord:
    id: str
    realm_id: str
    slug: str
    tagline: str = ""
    avatar_url: Optional[str] = None
    accent_color: Optional[str] = None
    logged_in_only: bool = False
    delisted: bool = False
    last_post_at: Optional[float] = None
    last_comment_at: Optional[float] = None
    last_activity_at: Optional[float] = None
    last_activity_from_others_at: Optional[float] = None
    # Per-user fields, filled in when boards are fetched for a user.
    last_visit_at: Optional[float] = None
    muted: bool = False
    pinned_order: Optional[int] = None
    has_updates: bool = False


@dataclass
class BoardUserState:
    firebase_id: str
    board_id: str
    last_visit_at: Optional[float] = None
    muted: bool = False
    pinned_order: Optional[int] = None


def normalize_user_settings(settings: list[dict]) -> list[dict]:
    """One entry per setting name, last one wins, ordered by name."""
    by_name: Dict[str, dict] = {}
    for setting in settings:
        name = setting.get("name")
        if not name:
            raise ValueError(f"User setting without a name: {setting!r}")
        by_name[name] = {
            "name": name,
            "type": setting.get("type", "STRING"),
            "value": setting.get("value"),
        }
    return [by_name[name] for name in sorted(by_name)]


def _with_user_state(
    board: BoardRecord, state: Optional[BoardUserState], firebase_id: str | None
) -> BoardRecord:
    if state is None:
        last_visit_at, muted, pinned_order = None, False, None
    else:
        last_visit_at, muted, pinned_order = (
            state.last_visit_at,
            state.muted,
            state.pinned_order,
        )
    has_updates = bool(
        firebase_id
        and not muted
        and board.last_activity_from_others_at is not None
        and (
            last_visit_at is None
            or board.last_activity_from_others_at > last_visit_at
        )
    )
    return replace(
        board,
        last_visit_at=last_visit_at,
        muted=muted,
        pinned_order=pinned_order,
        has_updates=has_updates,
    )


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.boards: Dict[str, BoardRecord] = {}
        self.board_user_state: Dict[tuple[str, str], BoardUserState] = {}
        self.user_settings: Dict[str, list[dict]] = {}
        self.realm_settings: Dict[str, dict] = {}

    def get_boards(self, firebase_id: str | None = None) -> Optional[list[BoardRecord]]:
        boards = sorted(self.boards.values(), key=lambda board: board.slug)
        return [
            _with_user_state(
                board,
                self.board_user_state.get((firebase_id, board.id)) if firebase_id else None,
                firebase_id,
            )
            for board in boards
        ]

    def get_user_settings(self, firebase_id: str) -> list[dict]:
        return [dict(setting) for setting in self.user_settings.get(firebase_id, [])]

    def get_realm_settings(self, realm_slug: str) -> Optional[dict]:
        return self.realm_settings.get(realm_slug)

    def save_board(self, board: BoardRecord) -> None:
        self.boards[board.id] = board

    def save_board_user_state(self, state: BoardUserState) -> None:
        self.board_user_state[(state.firebase_id, state.board_id)] = state

    def save_user_settings(self, firebase_id: str, settings: list[dict]) -> None:
        self.user_settings[firebase_id] = normalize_user_settings(settings)

    def save_realm_settings(self, realm_slug: str, settings: dict) -> None:
        self.realm_settings[realm_slug] = settings

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.boards.clear()
        self.board_user_state.clear()
        self.user_settings.clear()
        self.realm_settings.clear()


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_board_record(self, row: "BoardRow") -> BoardRecord:
        return BoardRecord(
            id=row.id,
            realm_id=row.realm_id,
            slug=row.slug,
            tagline=row.tagline,
            avatar_url=row.avatar_url,
            accent_color=row.accent_color,
            logged_in_only=row.logged_in_only,
            delisted=row.delisted,
            last_post_at=row.last_post_at,
            last_comment_at=row.last_comment_at,
            last_activity_at=row.last_activity_at,
            last_activity_from_others_at=row.last_activity_from_others_at,
        )

    def get_boards(self, firebase_id: str | None = None) -> Optional[list[BoardRecord]]:
        with self.Session() as session:
            rows = session.execute(select(BoardRow).order_by(BoardRow.slug.asc())).scalars().all()
            states: Dict[str, BoardUserState] = {}
            if firebase_id:
                state_rows = session.execute(
                    select(BoardUserStateRow).where(
                        BoardUserStateRow.user_id == firebase_id
                    )
                ).scalars()
                for state in state_rows:
                    states[state.board_id] = BoardUserState(
                        firebase_id=state.user_id,
                        board_id=state.board_id,
                        last_visit_at=state.last_visit_at,
                        muted=state.muted,
                        pinned_order=state.pinned_order,
                    )
            return [
                _with_user_state(self._to_board_record(row), states.get(row.id), firebase_id)
                for row in rows
            ]

    def get_user_settings(self, firebase_id: str) -> list[dict]:
        with self.Session() as session:
            rows = session.execute(
                select(UserSettingRow)
                .where(UserSettingRow.user_id == firebase_id)
                .order_by(UserSettingRow.name.asc())
            ).scalars()
            return [
                {"name": row.name, "type": row.type, "value": row.value}
                for row in rows
            ]

    def get_realm_settings(self, realm_slug: str) -> Optional[dict]:
        with self.Session() as session:
            row = session.get(RealmSettingsRow, realm_slug)
            return row.data if row else None

    def save_board(self, board: BoardRecord) -> None:
        with self.Session() as session:
            row = session.get(BoardRow, board.id)
            if not row:
                row = BoardRow(id=board.id)
                session.add(row)
            row.realm_id = board.realm_id
            row.slug = board.slug
            row.tagline = board.tagline
            row.avatar_url = board.avatar_url
            row.accent_color = board.accent_color
            row.logged_in_only = board.logged_in_only
            row.delisted = board.delisted
            row.last_post_at = board.last_post_at
            row.last_comment_at = board.last_comment_at
            row.last_activity_at = board.last_activity_at
            row.last_activity_from_others_at = board.last_activity_from_others_at
            session.commit()

    def save_board_user_state(self, state: BoardUserState) -> None:
        with self.Session() as session:
            row = session.get(BoardUserStateRow, (state.firebase_id, state.board_id))
            if not row:
                row = BoardUserStateRow(user_id=state.firebase_id, board_id=state.board_id)
                session.add(row)
            row.last_visit_at = state.last_visit_at
            row.muted = state.muted
            row.pinned_order = state.pinned_order
            session.commit()

    def save_user_settings(self, firebase_id: str, settings: list[dict]) -> None:
        normalized = normalize_user_settings(settings)
        with self.Session() as session:
            session.query(UserSettingRow).filter(
                UserSettingRow.user_id == firebase_id
            ).delete(synchronize_session=False)
            for setting in normalized:
                session.add(
                    UserSettingRow(
                        user_id=firebase_id,
                        name=setting["name"],
                        type=setting["type"],
                        value=setting["value"],
                    )
                )
            session.commit()

    def save_realm_settings(self, realm_slug: str, settings: dict) -> None:
        with self.Session() as session:
            existing = session.get(RealmSettingsRow, realm_slug)
            if existing:
                existing.data = settings
            else:
                session.add(RealmSettingsRow(slug=realm_slug, data=settings))
            session.commit()


Base = declarative_base()


class BoardRow(Base):
    __tablename__ = "boards"

    id = Column(String, primary_key=True)
    realm_id = Column(String, nullable=False, index=True)
    slug = Column(String, nullable=False, unique=True)
    tagline = Column(String, nullable=False, default="")
    avatar_url = Column(String, nullable=True)
    accent_color = Column(String, nullable=True)
    logged_in_only = Column(Boolean, nullable=False, default=False)
    delisted = Column(Boolean, nullable=False, default=False)
    last_post_at = Column(Float, nullable=True)
    last_comment_at = Column(Float, nullable=True)
    last_activity_at = Column(Float, nullable=True)
    last_activity_from_others_at = Column(Float, nullable=True)


class BoardUserStateRow(Base):
    __tablename__ = "board_user_state"

    user_id = Column(String, primary_key=True)
    board_id = Column(String, primary_key=True)
    last_visit_at = Column(Float, nullable=True)
    muted = Column(Boolean, nullable=False, default=False)
    pinned_order = Column(Integer, nullable=True)


class UserSettingRow(Base):
    __tablename__ = "user_settings"

    user_id = Column(String, primary_key=True)
    name = Column(String, primary_key=True)
    type = Column(String, nullable=False)
    value = Column(JSON, nullable=True)


class RealmSettingsRow(Base):
    __tablename__ = "realm_settings"

    slug = Column(String, primary_key=True)
    data = Column("settings", JSON, nullable=False)
