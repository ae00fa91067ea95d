from sqlalchemy import Column, LargeBinary
from surl.database.connection import Base


class KVRecord(Base):
    """
    One key/value pair.

    Keys are either a generated identifier ("/0", "/a1", ...) or the
    counter metadata key. Values are raw bytes, stored exactly as written.
    """
    __tablename__ = "kv_records"

    key = Column(LargeBinary, primary_key=True)
    value = Column(LargeBinary, nullable=False)
