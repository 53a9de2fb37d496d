# SPDX-License-Identifier: MIT

from typing import TypedDict

# Suggested values for the open string fields of a FlowEntry. Stored data is
# never validated against these lists.


class ColorOption(TypedDict):
    value: str
    meaning: str
    style: str  # Rich style used to render the swatch


class DrinkSize(TypedDict):
    name: str
    label: str
    oz: float
    mL: float


COLOR_OPTIONS: list[ColorOption] = [
    {"value": "Light Yellow", "meaning": "Normal", "style": "black on khaki1"},
    {
        "value": "Clear",
        "meaning": "Very hydrated or overhydrated",
        "style": "black on grey93",
    },
    {
        "value": "Dark Yellow",
        "meaning": "Mild dehydration",
        "style": "black on yellow",
    },
    {"value": "Amber or Honey", "meaning": "Dehydrated", "style": "black on gold3"},
    {
        "value": "Orange",
        "meaning": "Dehydration, Liver/bile duct issues, Certain medications",
        "style": "black on orange1",
    },
    {
        "value": "Pink or Red",
        "meaning": "Beets, blackberries, rhubarb, Blood in urine (hematuria)",
        "style": "black on light_pink1",
    },
    {
        "value": "Blue or Green",
        "meaning": "Medications",
        "style": "black on aquamarine1",
    },
    {
        "value": "Brown or Cola-colored",
        "meaning": "Dyes in food or medications, Certain bacterial infections",
        "style": "white on orange4",
    },
    {
        "value": "Cloudy or Murky",
        "meaning": "Urinary tract infection",
        "style": "black on grey70",
    },
    {
        "value": "Foamy or Bubbly",
        "meaning": "Excess protein in urine",
        "style": "black on light_sky_blue1",
    },
]

URGENCY_OPTIONS: list[str] = [
    "Normal",
    "Hour < 60 min",
    "Hold < 15 min",
    "Hold < 5 minutes",
    "Had drips",
    "Couldn't hold it",
]

CONCERN_OPTIONS: list[str] = [
    "Straining",
    "Dribbling",
    "Frequent urges",
    "Incomplete emptying",
    "Waking just to pee",
    "Pain",
    "Burning",
    "Blood",
]

FLUID_TYPE_OTHER = "Other"

FLUID_TYPE_OPTIONS: list[str] = [
    "Water",
    "Juice",
    "Tea",
    "Soda",
    "Coffee",
    "Alcohol",
    FLUID_TYPE_OTHER,
]

FLUID_UNITS: list[str] = ["oz", "mL"]

COMMON_DRINK_SIZES: list[DrinkSize] = [
    {"name": "small", "label": "Small (8 oz / 240 mL)", "oz": 8, "mL": 240},
    {"name": "medium", "label": "Medium (12 oz / 355 mL)", "oz": 12, "mL": 355},
    {"name": "large", "label": "Large (16 oz / 475 mL)", "oz": 16, "mL": 475},
    {
        "name": "xl",
        "label": "Extra Large (20 oz / 590 mL)",
        "oz": 20,
        "mL": 590,
    },
    {"name": "750", "label": "750 mL (25.4 oz)", "oz": 25.4, "mL": 750},
    {"name": "1000", "label": "1000 mL (33.8 oz)", "oz": 33.8, "mL": 1000},
]
