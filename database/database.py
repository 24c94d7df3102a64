import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from database.models import Base

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///jobping_matches.db")

engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Create the match tables if they do not exist."""
    Base.metadata.create_all(bind=bind or engine)
