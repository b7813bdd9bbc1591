from models.user import User
from models.refresh_token import RefreshToken
from models.customer import Customer
from models.measurement import Measurement
from sqlalchemy import create_engine, event
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from models.base_model import Base

# Map model names for easy querying
classes = {
    "User": User,
    "RefreshToken": RefreshToken,
    "Customer": Customer,
    "Measurement": Measurement,
}


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") == "sqlite:")


class DBStorage:
    __engine = None
    __session = None

    def reload(self, database_url: str, echo: bool = False):
        """(Re)bind the engine, create tables and start a scoped session"""
        self.dispose()
        kwargs = {"echo": echo}
        if _is_memory_sqlite(database_url):
            # One shared connection, otherwise every checkout sees an empty database
            kwargs.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
        elif not database_url.startswith("sqlite"):
            kwargs["pool_pre_ping"] = True
        self.__engine = create_engine(database_url, **kwargs)

        # Enable SQLite foreign keys (needed for ON DELETE CASCADE)
        if self.__engine.url.get_backend_name() == "sqlite":
            @event.listens_for(self.__engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        Base.metadata.create_all(self.__engine)
        session_factory = sessionmaker(bind=self.__engine, expire_on_commit=False)
        self.__session = scoped_session(session_factory)

    def new(self, obj):
        """Add object to session"""
        self.__session.add(obj)

    def save(self):
        """Commit session"""
        try:
            self.__session.commit()
        except SQLAlchemyError:
            self.__session.rollback()
            raise

    def rollback(self):
        if self.__session is not None:
            self.__session.rollback()

    def delete(self, obj=None):
        """Delete object if exists (hard delete)"""
        if obj:
            self.__session.delete(obj)

    def get(self, cls, id):
        """Fetch one object by class and ID"""
        if cls in classes.values():
            return self.__session.get(cls, id)
        return None

    def count(self, cls=None):
        """Count objects"""
        if cls:
            return self.__session.query(cls).count()
        total = 0
        for model in classes.values():
            total += self.__session.query(model).count()
        return total

    def close(self):
        """Remove session (for API teardown)"""
        if self.__session is not None:
            self.__session.remove()

    def dispose(self):
        """Drop the current session and engine, if any"""
        self.close()
        if self.__engine is not None:
            self.__engine.dispose()
        self.__engine = None
        self.__session = None

    # expose the SQLAlchemy session for advanced querying (joins, filters, etc.)
    def get_session(self):
        return self.__session
