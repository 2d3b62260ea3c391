import enum
from sqlalchemy import Column, Integer, String, Enum as SAEnum
from ..db.base import Base


class TableStatusEnum(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"


class DiningTable(Base):
    __tablename__ = "dining_tables"

    id = Column(Integer, primary_key=True, index=True)
    number = Column(Integer, nullable=False)
    status = Column(
        SAEnum(TableStatusEnum, name="table_status"),
        nullable=False,
        default=TableStatusEnum.AVAILABLE,
    )


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    address_line = Column(String(255), nullable=False)
