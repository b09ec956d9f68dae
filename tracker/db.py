from sqlmodel import Session, SQLModel, create_engine

from tracker import config
from tracker import models  # noqa: F401  registers the tables on SQLModel.metadata


def make_engine(url: str = config.DATABASE_URL, **kwargs):
    # FastAPI runs sync endpoints in a threadpool; sqlite connections must be shareable
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=False, **kwargs)


engine = make_engine()


def init_db(bind=None) -> None:
    """Create the sleep_records and meal_records tables if missing."""
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    with Session(engine) as session:
        yield session
