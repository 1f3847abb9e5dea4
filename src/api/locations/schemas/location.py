from pydantic import BaseModel, ConfigDict


class LocationSummary(BaseModel):
    """Location display fields joined onto contract reads"""
    id: int
    location_name: str

    model_config = ConfigDict(from_attributes=True)
