from pydantic import BaseModel, ConfigDict

ORIGIN_ICON = "ic_origin"
DESTINATION_ICON = "ic_dest"
WAYPOINT_ICON = "ic_waypoint"


class MapPin(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float
    image: str = WAYPOINT_ICON

    def payload(self) -> dict:
        return {"Point": {"Lat": self.lat, "Lon": self.lon}, "Image": self.image}
