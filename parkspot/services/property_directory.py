from sqlalchemy.orm import Session
from typing import Optional
from parkspot.models.property_model import ParkingProperty


class PropertyDirectory:
    """Read-only access to listed parking properties."""

    @staticmethod
    def get_property_by_id(
            db: Session, property_id: str, for_update: bool = False
    ) -> Optional[ParkingProperty]:
        """Get property by ID, optionally row-locking it for the current transaction"""
        query = db.query(ParkingProperty).filter(ParkingProperty.id == str(property_id))
        if for_update:
            query = query.with_for_update()
        return query.first()


property_directory = PropertyDirectory()
