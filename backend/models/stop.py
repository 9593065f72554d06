from pydantic import BaseModel, ConfigDict
from typing import Literal, Union

US_COUNTRY = "United States"
US_POSTAL_FILTER = "Us"


class _Stop(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str


class CoordinateStop(_Stop):
    kind: Literal["coordinate"] = "coordinate"
    lat: float
    lon: float

    def payload(self) -> dict:
        return {"Label": self.label, "Coords": {"Lat": self.lat, "Lon": self.lon}}


class PostalCodeStop(_Stop):
    kind: Literal["postal_code"] = "postal_code"
    code: str
    country: str = US_COUNTRY
    postal_filter: str = US_POSTAL_FILTER

    def payload(self) -> dict:
        return {
            "Label": self.label,
            "Address": {
                "Zip": self.code,
                "Country": self.country,
                "CountryPostalFilter": self.postal_filter,
            },
        }


class CityStateStop(_Stop):
    kind: Literal["city_state"] = "city_state"
    city: str
    state: str
    country: str = US_COUNTRY

    def payload(self) -> dict:
        return {
            "Label": self.label,
            "Address": {"City": self.city, "State": self.state, "Country": self.country},
        }


class StreetAddressStop(_Stop):
    kind: Literal["street_address"] = "street_address"
    text: str

    def payload(self) -> dict:
        return {"Label": self.label, "Address": {"StreetAddress": self.text}}


ClassifiedStop = Union[CoordinateStop, PostalCodeStop, CityStateStop, StreetAddressStop]
