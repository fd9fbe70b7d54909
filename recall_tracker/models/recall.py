import uuid
from typing import Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    RootModel,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from recall_tracker.errors import DecodeFailure


class WireModel(BaseModel):
    """Base for records decoded from the CPSC recall API (PascalCase field names)."""
    model_config = ConfigDict(populate_by_name=True)


class Product(WireModel):
    """A recalled product."""
    name: str = Field(alias="Name")
    description: Optional[str] = Field(default=None, alias="Description")
    model: Optional[str] = Field(default=None, alias="Model")
    types: Optional[str] = Field(default=None, alias="Types")
    category_id: Optional[str] = Field(default=None, alias="CategoryID")
    number_of_units: Optional[str] = Field(default=None, alias="NumberOfUnits")

    _display_id: str = PrivateAttr(default_factory=lambda: str(uuid.uuid4()))

    @property
    def display_id(self) -> str:
        return self._display_id


class Inconjunction(WireModel):
    """A related recall announced in conjunction with this one."""
    url: str = Field(alias="URL")

    _display_id: str = PrivateAttr(default_factory=lambda: str(uuid.uuid4()))

    @property
    def display_id(self) -> str:
        return self._display_id


class RecallImage(WireModel):
    url: str = Field(alias="URL")
    caption: str = Field(alias="Caption")

    @property
    def display_id(self) -> str:
        return self.url


class Injury(WireModel):
    name: str = Field(alias="Name")

    _display_id: str = PrivateAttr(default_factory=lambda: str(uuid.uuid4()))

    @property
    def display_id(self) -> str:
        return self._display_id


class Company(WireModel):
    """A manufacturer, retailer, importer or distributor."""
    name: str = Field(alias="Name")
    company_id: Optional[str] = Field(default=None, alias="CompanyID")

    @property
    def display_id(self) -> str:
        return self.name


class Country(WireModel):
    country: str = Field(alias="Country")

    @property
    def display_id(self) -> str:
        return self.country


class Hazard(WireModel):
    name: str = Field(alias="Name")
    hazard_type: Optional[str] = Field(default=None, alias="HazardType")
    hazard_type_id: Optional[str] = Field(default=None, alias="HazardTypeID")

    @property
    def display_id(self) -> str:
        return self.name


class Remedy(WireModel):
    name: str = Field(alias="Name")

    @property
    def display_id(self) -> str:
        return self.name


class RemedyOption(WireModel):
    option: str = Field(alias="Option")

    @property
    def display_id(self) -> str:
        return self.option


class ProductUPC(RootModel):
    """
    A UPC entry, which the API sends either as a bare string or as an object
    of string values. The string form is tried first, then the mapping form;
    anything else is rejected.
    """
    root: Union[StrictStr, Dict[StrictStr, StrictStr]] = Field(union_mode="left_to_right")

    @property
    def is_mapping(self) -> bool:
        return isinstance(self.root, dict)

    @property
    def display_id(self) -> str:
        if self.is_mapping:
            return "-".join(self.root.values())
        return self.root


class Recall(WireModel):
    """
    A single recall record.

    Two recalls compare equal when their ids are equal, regardless of the
    other fields.
    """
    recall_id: StrictInt = Field(alias="RecallID")
    recall_number: Optional[str] = Field(default=None, alias="RecallNumber")
    recall_date: Optional[str] = Field(default=None, alias="RecallDate")
    description: Optional[str] = Field(default=None, alias="Description")
    url: Optional[str] = Field(default=None, alias="URL")
    title: Optional[str] = Field(default=None, alias="Title")
    consumer_contact: Optional[str] = Field(default=None, alias="ConsumerContact")
    last_publish_date: Optional[str] = Field(default=None, alias="LastPublishDate")
    products: List[Product] = Field(alias="Products")
    inconjunctions: List[Inconjunction] = Field(alias="Inconjunctions")
    images: List[RecallImage] = Field(alias="Images")
    injuries: List[Injury] = Field(alias="Injuries")
    manufacturers: List[Company] = Field(alias="Manufacturers")
    retailers: List[Company] = Field(alias="Retailers")
    importers: List[Company] = Field(alias="Importers")
    distributors: Optional[List[Company]] = Field(default=None, alias="Distributors")
    sold_at_label: Optional[str] = Field(default=None, alias="SoldAtLabel")
    manufacturer_countries: List[Country] = Field(alias="ManufacturerCountries")
    product_upcs: Optional[List[ProductUPC]] = Field(default=None, alias="ProductUPCs")
    hazards: List[Hazard] = Field(alias="Hazards")
    remedies: List[Remedy] = Field(alias="Remedies")
    remedy_options: List[RemedyOption] = Field(alias="RemedyOptions")

    @property
    def id(self) -> int:
        return self.recall_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recall):
            return NotImplemented
        return self.recall_id == other.recall_id

    def __hash__(self) -> int:
        return hash(self.recall_id)


_RECALL_LIST = TypeAdapter(List[Recall])


def decode_recalls(payload: Union[bytes, str]) -> List[Recall]:
    """
    Decode a JSON array of recall records.

    The batch is all-or-nothing: one malformed record fails the whole decode.

    Args:
        payload: Raw JSON body returned by the recall API

    Returns:
        The decoded recalls in wire order

    Raises:
        DecodeFailure: If the payload is not a JSON array of valid recall records
    """
    try:
        return _RECALL_LIST.validate_json(payload)
    except ValidationError as e:
        raise DecodeFailure(f"Invalid recall payload: {e.error_count()} error(s): {e}") from e
