"""Label customization and rendered label models."""

from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LayoutType(str, Enum):
    """Supported FDA panel layouts."""

    VERTICAL = "vertical"
    LINEAR = "linear"
    TABULAR = "tabular"


class Language(str, Enum):
    """Label languages."""

    EN = "en"
    AR = "ar"


class Alignment(str, Enum):
    """Horizontal text alignment."""

    LEFT = "left"
    CENTER = "center"


class CaseTransform(str, Enum):
    """Case transformation applied to label text."""

    NONE = "none"
    LOWER = "lower"
    TITLE = "title"


class LabelCustomization(BaseModel):
    """Caller-supplied label configuration.

    Accepts snake_case and camelCase keys. Unspecified fields take the
    default FDA vertical English layout.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    layout_type: LayoutType = LayoutType.VERTICAL
    language: Language = Language.EN
    alignment: Alignment = Alignment.LEFT
    case_transform: CaseTransform = CaseTransform.NONE
    width_px: int = Field(default=227, ge=1)
    text_color: str = "black"
    background_color: str = "white"
    hide_ingredient_list: bool = False
    hide_business_info: bool = False
    hide_allergens: bool = False
    show_qr_code: bool = Field(default=False, alias="showQRCode")
    vitamins: tuple[str, ...] = ()
    optional_nutrients: tuple[str, ...] = ()

    def apply_patch(self, patch: Mapping[str, object]) -> "LabelCustomization":
        """Return a new customization with the given fields replaced."""
        merged = self.model_dump()
        current = LabelCustomization.model_validate(dict(patch)).model_dump(
            exclude_unset=True
        )
        merged.update(current)
        return LabelCustomization.model_validate(merged)


class BusinessInfo(BaseModel):
    """Manufacturer or distributor block printed under the panel."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    company_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class LabelRow(BaseModel):
    """One nutrient line with its numeric and presented values."""

    code: str
    label: str
    quantity: float
    unit: str
    amount_text: str
    dv_percent: int | None = None
    dv_text: str | None = None
    indent: int = 0
    emphasis: bool = False
    cells: list[str] = Field(default_factory=list)


class LabelSection(BaseModel):
    """Group of rows or text within a layout."""

    kind: str
    heading: str | None = None
    headers: list[str] = Field(default_factory=list)
    rows: list[LabelRow] = Field(default_factory=list)
    text: str | None = None


class QRCodeBlock(BaseModel):
    """Content and placement handed to the QR code collaborator."""

    content: str
    position: str


class RenderedLabel(BaseModel):
    """Structured, language and layout tagged label content."""

    layout: LayoutType
    language: Language
    direction: str
    alignment: Alignment
    width_px: int
    text_color: str
    background_color: str
    title: str
    product_name: str | None = None
    servings_per_container: int
    servings_text: str = ""
    serving_size_g: int
    serving_size_text: str = ""
    calories: int
    sections: list[LabelSection]
    footnote: str
    ingredients_heading: str | None = None
    ingredients: list[str] | None = None
    allergens: list[str] | None = None
    allergen_statement: str | None = None
    business_heading: str | None = None
    business_info: BusinessInfo | None = None
    qr_code: QRCodeBlock | None = None

    def rows(self) -> list[LabelRow]:
        """Return every nutrient row across sections in display order."""
        return [row for section in self.sections for row in section.rows]
