"""
Database engine and session setup for the local cache
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from oscar_party.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
