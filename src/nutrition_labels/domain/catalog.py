"""Shared nutrient metadata keyed by nutrient code."""

from dataclasses import dataclass

from nutrition_labels.domain.nutrition import NutrientUnit


@dataclass(frozen=True)
class NutrientInfo:
    """Display metadata for one nutrient code."""

    code: str
    label_en: str
    label_ar: str
    unit: NutrientUnit
    precision: int
    aliases: tuple[str, ...] = ()

    def label(self, language: str) -> str:
        """Return the label in the requested language."""
        if language == "ar":
            return self.label_ar
        return self.label_en


_G = NutrientUnit.G
_MG = NutrientUnit.MG
_MCG = NutrientUnit.MCG

NUTRIENTS: dict[str, NutrientInfo] = {
    info.code: info
    for info in (
        NutrientInfo(
            "ENERC_KCAL",
            "Calories",
            "السعرات الحرارية",
            NutrientUnit.KCAL,
            0,
        ),
        NutrientInfo("FAT", "Total Fat", "إجمالي الدهون", _G, 1, ("totalFat",)),
        NutrientInfo(
            "FASAT",
            "Saturated Fat",
            "الدهون المشبعة",
            _G,
            1,
            ("saturatedFat",),
        ),
        NutrientInfo("FATRN", "Trans Fat", "الدهون المتحولة", _G, 1, ("transFat",)),
        NutrientInfo(
            "FAMS",
            "Monounsaturated Fat",
            "الدهون الأحادية غير المشبعة",
            _G,
            1,
            ("monounsaturatedFat",),
        ),
        NutrientInfo(
            "FAPU",
            "Polyunsaturated Fat",
            "الدهون المتعددة غير المشبعة",
            _G,
            1,
            ("polyunsaturatedFat",),
        ),
        NutrientInfo("CHOLE", "Cholesterol", "الكوليسترول", _MG, 0, ("cholesterol",)),
        NutrientInfo("NA", "Sodium", "الصوديوم", _MG, 0, ("sodium",)),
        NutrientInfo(
            "CHOCDF",
            "Total Carbohydrate",
            "إجمالي الكربوهيدرات",
            _G,
            1,
            ("totalCarbohydrate", "carbs"),
        ),
        NutrientInfo(
            "FIBTG",
            "Dietary Fiber",
            "الألياف الغذائية",
            _G,
            1,
            ("dietaryFiber", "fiber"),
        ),
        NutrientInfo(
            "SUGAR",
            "Total Sugars",
            "إجمالي السكريات",
            _G,
            1,
            ("totalSugars", "sugar"),
        ),
        NutrientInfo(
            "SUGAR.added",
            "Includes Added Sugars",
            "تشمل السكريات المضافة",
            _G,
            1,
            ("addedSugars",),
        ),
        NutrientInfo(
            "SUGAR.alcohol",
            "Sugar Alcohol",
            "كحول السكر",
            _G,
            1,
            ("sugarAlcohol",),
        ),
        NutrientInfo("PROCNT", "Protein", "البروتين", _G, 1, ("protein",)),
        NutrientInfo("VITD", "Vitamin D", "فيتامين د", _MCG, 1, ("vitaminD",)),
        NutrientInfo("CA", "Calcium", "الكالسيوم", _MG, 0, ("calcium",)),
        NutrientInfo("FE", "Iron", "الحديد", _MG, 1, ("iron",)),
        NutrientInfo("K", "Potassium", "البوتاسيوم", _MG, 0, ("potassium",)),
        NutrientInfo("VITA_RAE", "Vitamin A", "فيتامين أ", _MCG, 0, ("vitaminA",)),
        NutrientInfo("VITC", "Vitamin C", "فيتامين ج", _MG, 1, ("vitaminC",)),
        NutrientInfo("TOCPHA", "Vitamin E", "فيتامين هـ", _MG, 1, ("vitaminE",)),
        NutrientInfo("VITK1", "Vitamin K", "فيتامين ك", _MCG, 1, ("vitaminK",)),
        NutrientInfo("THIA", "Thiamin", "الثيامين", _MG, 2, ("thiamin", "thiamine")),
        NutrientInfo("RIBF", "Riboflavin", "الريبوفلافين", _MG, 2, ("riboflavin",)),
        NutrientInfo("NIA", "Niacin", "النياسين", _MG, 1, ("niacin",)),
        NutrientInfo("VITB6A", "Vitamin B6", "فيتامين ب6", _MG, 2, ("vitaminB6",)),
        NutrientInfo("FOLDFE", "Folate", "الفولات", _MCG, 0, ("folate",)),
        NutrientInfo("VITB12", "Vitamin B12", "فيتامين ب12", _MCG, 2, ("vitaminB12",)),
        NutrientInfo(
            "PANTAC",
            "Pantothenic Acid",
            "حمض البانتوثينيك",
            _MG,
            1,
            ("pantothenicAcid",),
        ),
        NutrientInfo("P", "Phosphorus", "الفوسفور", _MG, 0, ("phosphorus",)),
        NutrientInfo("MG", "Magnesium", "المغنيسيوم", _MG, 0, ("magnesium",)),
        NutrientInfo("ZN", "Zinc", "الزنك", _MG, 1, ("zinc",)),
        NutrientInfo("SE", "Selenium", "السيلينيوم", _MCG, 1, ("selenium",)),
        NutrientInfo("CU", "Copper", "النحاس", _MG, 2, ("copper",)),
        NutrientInfo("MN", "Manganese", "المنغنيز", _MG, 2, ("manganese",)),
    )
}

# Vitamins and minerals a caller may opt into, in the label's default order.
SELECTABLE_MICRONUTRIENTS: tuple[str, ...] = (
    "VITA_RAE",
    "VITC",
    "TOCPHA",
    "VITK1",
    "THIA",
    "RIBF",
    "NIA",
    "VITB6A",
    "FOLDFE",
    "VITB12",
    "PANTAC",
    "P",
    "MG",
    "ZN",
    "SE",
    "CU",
    "MN",
)

MANDATORY_MICRONUTRIENTS: tuple[str, ...] = ("VITD", "CA", "FE", "K")

OPTIONAL_NUTRIENTS: tuple[str, ...] = (
    "monounsaturatedFat",
    "polyunsaturatedFat",
    "sugarAlcohol",
    "proteinPercentage",
)

_ALIASES: dict[str, str] = {
    alias.lower(): info.code for info in NUTRIENTS.values() for alias in info.aliases
}
_ALIASES.update({code.lower(): code for code in NUTRIENTS})

UI_TEXT: dict[str, dict[str, str]] = {
    "en": {
        "title": "Nutrition Facts",
        "servings": "servings per container",
        "serving_size": "Serving size",
        "amount_per_serving": "Amount per serving",
        "calories": "Calories",
        "daily_value": "% Daily Value*",
        "nutrient": "Nutrient",
        "amount": "Amount",
        "ingredients": "Ingredients",
        "contains": "Contains",
        "and": "and",
        "business": "Distributed by",
        "footnote": (
            "* The % Daily Value (DV) tells you how much a nutrient in a serving "
            "of food contributes to a daily diet. 2,000 calories a day is used "
            "for general nutrition advice."
        ),
    },
    "ar": {
        "title": "حقائق غذائية",
        "servings": "حصة في العبوة",
        "serving_size": "حجم الحصة",
        "amount_per_serving": "الكمية لكل حصة",
        "calories": "السعرات الحرارية",
        "daily_value": "% القيمة اليومية*",
        "nutrient": "العنصر الغذائي",
        "amount": "الكمية",
        "ingredients": "المكونات",
        "contains": "يحتوي على",
        "and": "و",
        "business": "توزيع",
        "footnote": (
            "* تخبرك نسبة القيمة اليومية بمدى مساهمة العنصر الغذائي في حصة من "
            "الطعام في النظام الغذائي اليومي. يُستخدم 2000 سعرة حرارية يوميًا "
            "للنصائح الغذائية العامة."
        ),
    },
}

UNIT_TEXT: dict[str, dict[NutrientUnit, str]] = {
    "en": {
        NutrientUnit.G: "g",
        NutrientUnit.MG: "mg",
        NutrientUnit.MCG: "mcg",
        NutrientUnit.KCAL: "kcal",
    },
    "ar": {
        NutrientUnit.G: "غ",
        NutrientUnit.MG: "ملغ",
        NutrientUnit.MCG: "مكغ",
        NutrientUnit.KCAL: "سعرة",
    },
}


def lookup(code: str) -> NutrientInfo | None:
    """Return catalog metadata for a code, if known."""
    return NUTRIENTS.get(code)


def resolve_code(selection: str) -> str | None:
    """Resolve a nutrient code or selection alias (e.g. ``vitaminA``)."""
    if not isinstance(selection, str):
        return None
    return _ALIASES.get(selection.strip().lower())
