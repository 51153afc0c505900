"""Mapping from WMO weather codes to conditions and their display extras."""
import random
from typing import Callable, List, Tuple

from weather_data import Condition

# Evaluated in order, first match wins. The storm row overlaps the shower
# rows and is therefore never reached; it is kept so the table stays in
# step with the upstream code list.
WEATHER_CODE_TABLE: List[Tuple[Callable[[int], bool], Condition]] = [
    (lambda code: code in (0, 1), Condition.CLEAR),
    (lambda code: code == 2, Condition.PARTLY_CLOUDY),
    (lambda code: code == 3, Condition.CLOUDY),
    (lambda code: code in (45, 48), Condition.FOG),
    (lambda code: 51 <= code <= 67, Condition.RAIN),
    (lambda code: 71 <= code <= 77, Condition.SNOW),
    (lambda code: 80 <= code <= 82, Condition.SHOWERS),
    (lambda code: 85 <= code <= 86, Condition.SNOW_SHOWERS),
    (lambda code: 80 <= code <= 82 or 85 <= code <= 86, Condition.STORM),
]

DEFAULT_CONDITION = Condition.CLOUDY

CONDITION_EMOJI = {
    Condition.CLEAR: "☀️",
    Condition.PARTLY_CLOUDY: "⛅",
    Condition.CLOUDY: "☁️",
    Condition.FOG: "🌫️",
    Condition.RAIN: "🌧️",
    Condition.SNOW: "❄️",
    Condition.SHOWERS: "⛈️",
    Condition.SNOW_SHOWERS: "🌨️",
    Condition.STORM: "⛈️",
}

DRAMATIC_MESSAGES = {
    Condition.RAIN: [
        "Kiša pada - Donesi kišobran!",
        "Mokri ulazak - Čuva se od kiše!",
        "Nebo se prazni - Ostani unutar!",
        "Kiša je ovdje - Bodljikavo vrijeme!",
    ],
    Condition.CLEAR: [
        "Sunce sjaji - Divno vrijeme!",
        "Zaštita od sunca preporučena!",
        "Najljepši dan godine!",
        "Idealno za planinu!",
    ],
    Condition.CLOUDY: [
        "Oblaci pokrivaju nebo!",
        "Blago sive boje - ali ugodno!",
        "Nema sunca ali nije loše!",
        "Tipično zimsko vrijeme!",
    ],
    Condition.PARTLY_CLOUDY: [
        "Mješavina sunca i oblaka!",
        "Lijepo, ali može biti hladnije!",
        "Promjenjivo vrijeme!",
        "Oblaci se pojavljuju i nestaju!",
    ],
    Condition.SNOW: [
        "Snijeg pada - Zimska čarolija!",
        "Bijela pokrivka na zemlji!",
        "Zimski podaci - Odjevite se toplo!",
        "Snježni pejzaž je spektakularan!",
    ],
}

ASCII_ART = {
    Condition.RAIN: """
    ___
   (____)
   /    \\
   | ~~ |
    \\ ~~/
     |~~|
    /|  |\\
   / |  | \\
  """,
    Condition.CLEAR: """
      \\  |  /
       \\ | /
        \\|/
    --- (*) ---
        /|\\
       / | \\
      /  |  \\
  """,
    Condition.SNOW: """
     *  *  *
    *  ❄️  *
     *  *  *
    **  *  **
  *    *    *
    *  *  *
  """,
    Condition.CLOUDY: """
    (    )
     ( )
    _____
   |     |
  """,
    Condition.PARTLY_CLOUDY: """
      \\  |  /
       \\ | /
        \\|/
    --- (*) ---
    (    )
     ( )
  """,
}

ART_PLACEHOLDER = "   (...weather brewing...)"


def condition_for_code(code: int) -> Condition:
    """Map a WMO weather code to a condition, first matching row wins."""
    for matches, condition in WEATHER_CODE_TABLE:
        if matches(code):
            return condition
    return DEFAULT_CONDITION


def emoji_for(condition: Condition) -> str:
    return CONDITION_EMOJI[condition]


def dramatic_message(condition: Condition, rng: random.Random) -> str:
    """Pick a narrative line for the condition, falling back to sunny lines."""
    messages = DRAMATIC_MESSAGES.get(condition, DRAMATIC_MESSAGES[Condition.CLEAR])
    return rng.choice(messages)


def ascii_art(condition: Condition) -> str:
    return ASCII_ART.get(condition, ART_PLACEHOLDER)
