"""Box model."""
from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship

from app.database import Base


class BoxRow(Base):
    """Box row - owns goods through goods.box_uid."""
    __tablename__ = "boxes"
    
    uid = Column(Uuid, primary_key=True)
    name = Column(String(255), nullable=False)
    
    # No ORM cascade: the storage manager deletes goods explicitly
    goods = relationship("GoodRow", back_populates="box", order_by="GoodRow.title")
