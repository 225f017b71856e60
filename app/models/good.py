"""Good model."""
from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.database import Base


class GoodRow(Base):
    """Good row - optionally assigned to one box."""
    __tablename__ = "goods"
    
    uid = Column(Uuid, primary_key=True)
    title = Column(String(255), nullable=False)
    box_uid = Column(Uuid, ForeignKey("boxes.uid"), nullable=True, index=True)
    
    # Relationships
    box = relationship("BoxRow", back_populates="goods")
