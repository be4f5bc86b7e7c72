from datetime import datetime, timezone
from sqlalchemy import Column, String, ForeignKey, Numeric, DateTime, CheckConstraint
import uuid
from parkspot.database import Base
from sqlalchemy.orm import relationship


class ParkingProperty(Base):
    __tablename__ = "parking_properties"
    __table_args__ = (CheckConstraint("hourly_rate >= 0", name="ck_parking_properties_rate"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    spot_title = Column(String, nullable=True)
    spot_type = Column(String, nullable=True)
    street_address = Column(String, nullable=False)
    unit = Column(String, nullable=True)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    zip_code = Column(String, nullable=False)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    # Optional availability window [starting_date, ending_date), naive UTC
    starting_date = Column(DateTime, nullable=True)
    ending_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    # Relationships
    owner = relationship("User", back_populates="properties")
    bookings = relationship("Booking", back_populates="property")

    @property
    def address(self) -> str:
        return f"{self.street_address}, {self.city}, {self.state} {self.zip_code}"
