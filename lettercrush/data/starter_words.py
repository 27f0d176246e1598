"""Small built-in word lists used when no external word source is supplied."""

from __future__ import annotations

from typing import Dict, Tuple

from .letters import Language

ENGLISH_STARTER_WORDS: Tuple[str, ...] = (
    "ACE", "ACT", "ADD", "AGE", "AGO", "AID", "AIM", "AIR", "ALE", "ANT",
    "APE", "ARC", "ARE", "ARM", "ART", "ASH", "ASK", "ATE", "BAD", "BAG",
    "BAT", "BED", "BEE", "BET", "BIG", "BIT", "BOX", "BUS", "CAN", "CAP",
    "CAR", "CAT", "COT", "COW", "CRY", "CUP", "CUT", "DAY", "DEN", "DIG",
    "DOG", "DOT", "DRY", "EAR", "EAT", "EEL", "EGG", "END", "ERA", "EYE",
    "FAN", "FAR", "FAT", "FEW", "FIG", "FIN", "FIT", "FLY", "FOG", "FOR",
    "FOX", "FUN", "GAS", "GET", "GOT", "GUM", "HAT", "HEN", "HER", "HID",
    "HIT", "HOT", "ICE", "INK", "ITS", "JAR", "JET", "KEY", "KID", "LAP",
    "LEG", "LET", "LID", "LIT", "LOG", "LOT", "MAN", "MAP", "MAT", "MEN",
    "MET", "MUD", "NET", "NEW", "NOD", "NOT", "NOW", "NUT", "OAK", "OAR",
    "ODD", "OIL", "ONE", "ORE", "OWL", "OWN", "PAN", "PEN", "PET", "PIE",
    "PIN", "POT", "RAT", "RED", "RIB", "ROD", "ROT", "RUN", "SAD", "SAT",
    "SEA", "SET", "SIT", "SUN", "TAN", "TAP", "TEA", "TEN", "TIE", "TIN",
    "TOE", "TON", "TOP", "TOY", "USE", "VAN", "WAR", "WEB", "WET", "WIN",
    "ANTS", "BATS", "BEAR", "BIRD", "BOAT", "CAKE", "CATS", "COAT", "DART",
    "DEAR", "DOGS", "DOOR", "EARN", "EAST", "FARM", "FISH", "GATE", "HEAT",
    "LATE", "MEAT", "NEAR", "NEST", "NOTE", "RAIN", "RATE", "READ", "REST",
    "ROAD", "SAND", "SEAT", "STAR", "TEAR", "TIDE", "TONE", "TREE", "WIND",
    "ALERT", "BEAST", "CANOE", "CRANE", "DANCE", "EARTH", "HEART", "LATER",
    "NORTH", "OCEAN", "RAISE", "SNORE", "STARE", "STONE", "TRAIN", "WATER",
    "CACTUS", "GARDEN", "ORANGE", "PLANET", "SILENT", "STREAM", "TRAINS",
)

POLISH_STARTER_WORDS: Tuple[str, ...] = (
    "BAL", "BAR", "BOK", "BOR", "BUT", "DAR", "DOM", "DYM", "GOL", "GRA",
    "KAT", "KOC", "KOD", "KOT", "KRA", "LAS", "LEW", "LOT", "MAK", "MAT",
    "MIS", "MOC", "MOST", "NOC", "NOS", "NOTA", "OKO", "OSA", "PAN", "PAS",
    "PIES", "POT", "RAK", "ROK", "ROWER", "RYBA", "SEN", "SER", "SOK", "SOL",
    "SOWA", "STO", "TOR", "WAZA", "WOZ", "ZAMEK", "ZUPA", "KOTY", "LATO",
    "MAMA", "TATA", "OKNO", "RANO", "NORA", "KORA", "MORZE", "WODA", "LODY",
    "KINO", "LAMPA", "PIANO", "TRAWA", "SOSNA", "RZEKA", "KWIAT", "PTAK",
    "MIASTO", "OGROD", "KAMIEN", "SZKOLA", "OBRAZ", "POKOJ", "SAMOLOT",
    "AUTO", "BRAT", "DZIEN", "GORA", "KROWA", "KOZA", "MYSZ", "NOGA", "RAMA",
)

STARTER_WORDS: Dict[Language, Tuple[str, ...]] = {
    Language.ENGLISH: ENGLISH_STARTER_WORDS,
    Language.POLISH: POLISH_STARTER_WORDS,
}
