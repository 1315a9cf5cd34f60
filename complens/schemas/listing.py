"""
Listing schemas
Structured listing data as extracted from a listing page.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class PropertyType(BaseModel):
    """Property kind and deal kind (e.g. "Apartment" / "sale")"""
    model_config = ConfigDict(frozen=True)

    property: str = Field(
        default="",
        description="Property kind",
        examples=["Apartment", "House"]
    )
    deal: str = Field(
        default="",
        description="Deal kind",
        examples=["sale", "rent"]
    )


class Location(BaseModel):
    """Location parts taken from the listing title"""
    model_config = ConfigDict(frozen=True)

    direction: Optional[str] = Field(default=None, examples=["Pärnu mnt 10"])
    city: Optional[str] = Field(default=None, examples=["Kesklinn"])
    parish: Optional[str] = Field(default=None, examples=["Tallinn"])
    county: Optional[str] = Field(default=None, examples=["Harjumaa"])


class PropertyRecord(BaseModel):
    """
    Listing record

    Produced once by the listing collector and read-only afterwards.
    Every valuation component consumes it as-is; feature values stay
    the raw strings shown on the listing page.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(
        description="Listing identifier on the portal",
        examples=["3435688"]
    )
    price: str = Field(
        description="Price as shown, with currency suffix",
        examples=["120 000 €"]
    )
    property_type: PropertyType = Field(
        default_factory=PropertyType,
        alias="propertyType",
    )
    location: Location = Field(default_factory=Location)
    features: dict[str, str] = Field(
        default_factory=dict,
        description="Feature table, camelCase keys",
        examples=[{"rooms": "3", "totalArea": "85 m²", "condition": "Good condition"}]
    )
    additional_info: dict[str, str] = Field(
        default_factory=dict,
        alias="additionalInfo",
        description="'Additional information' block, camelCase keys",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    def to_summary(self) -> str:
        """Short one-line summary"""
        parts = [self.id, self.price]
        if self.property_type.property:
            parts.append(self.property_type.property)
        if self.location.parish:
            parts.append(self.location.parish)
        return " | ".join(parts)


class FeatureSet(BaseModel):
    """
    Features relevant to scoring

    Values are strings, as on the listing page. Numbers given on input
    are converted to strings so records and queries look alike.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rooms: Optional[str] = Field(default=None, examples=["3"])
    built_in_year: Optional[str] = Field(
        default=None,
        alias="builtInYear",
        examples=["1998"]
    )
    condition: Optional[str] = Field(default=None, examples=["Good condition"])
    number_of_floors: Optional[str] = Field(
        default=None,
        alias="numberOfFloors",
        description="Defaults to 1 when absent",
        examples=["2"]
    )
    total_area: Optional[str] = Field(
        default=None,
        alias="totalArea",
        examples=["85 m²"]
    )

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @classmethod
    def from_record(cls, record: PropertyRecord) -> "FeatureSet":
        """Project the scoring features out of a record's feature table"""
        return cls.from_features(record.features)

    @classmethod
    def from_features(cls, features: dict[str, str]) -> "FeatureSet":
        # only the known keys, unknown ones are not scored
        known = {
            name: features[name]
            for name in ("rooms", "builtInYear", "condition", "numberOfFloors", "totalArea")
            if name in features
        }
        return cls.model_validate(known)
