from typing import Optional

from sqlalchemy.orm import sessionmaker

from logger_config import get_logger
from persistence.db import SessionLocal, init_db, make_engine
from persistence.models import SecureValueModel

logger = get_logger(__name__)


class SecureTokenStore:
    """
    Durable key/value storage for the session token. Values survive process
    restarts because they live in the database behind DATABASE_URL.
    """

    def __init__(self, session_factory=None):
        if session_factory is None:
            init_db()
            session_factory = SessionLocal
        self.session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "SecureTokenStore":
        engine = make_engine(database_url)
        init_db(bind=engine)
        return cls(sessionmaker(bind=engine, autoflush=False, autocommit=False))

    def secure_get(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            row = db.query(SecureValueModel).filter(SecureValueModel.key == key).first()
            return row.value if row else None

    def secure_set(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self.secure_clear(key)
            return
        with self.session_factory() as db:
            row = db.query(SecureValueModel).filter(SecureValueModel.key == key).first()
            if row is None:
                row = SecureValueModel(key=key, value=value)
            else:
                row.value = value
            db.add(row)
            db.commit()
        logger.debug("Secure value stored", key=key)

    def secure_clear(self, key: str) -> None:
        with self.session_factory() as db:
            deleted = db.query(SecureValueModel).filter(SecureValueModel.key == key).delete()
            db.commit()
        if deleted:
            logger.debug("Secure value cleared", key=key)
