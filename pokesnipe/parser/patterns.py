"""Compiled rule tables for listing-title parsing.

Precedence lives in the order of the tuples below, not in control flow: the
parser walks each table top-down and stops at the first rule that yields a
result. Each rule can be exercised on its own.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Final, Mapping, Optional, Pattern, Tuple

from .names import (
    DARK_POKEMON,
    GIOVANNIS_POKEMON,
    LIGHT_POKEMON,
    NAME_CORRECTIONS,
    POKEMON_NAMES,
    REGIONAL_FORMS,
    TEAM_ROCKETS_POKEMON,
    TRAINER_NAMES,
)

I = re.IGNORECASE


def _alternation(fragments) -> str:
    return "|".join(fragments)


# --------------------------------------------------------------------------
# Card numbers
# --------------------------------------------------------------------------

@dataclass(frozen=True)
class NumberHit:
    """A card number found in a title.

    `number` is what the catalog is queried with, `printed` is the number as
    it appears on the card (keeps the denominator when there is one).
    """
    number: str
    printed: str
    tag: str
    promo_prefix: Optional[str] = None


@dataclass(frozen=True)
class NumberRule:
    name: str
    pattern: Pattern
    extract: Callable[[re.Match, str], Optional[NumberHit]]

    def apply(self, title: str) -> Optional[NumberHit]:
        match = self.pattern.search(title)
        if not match:
            return None
        return self.extract(match, title)


SHINY_VAULT_NUMBER = re.compile(r"\bSV(\d{1,3})\s*[/\\]\s*SV(\d{2,3})\b", I)
TRAINER_GALLERY_NUMBER = re.compile(r"\bTG(\d{1,2})\s*[/\\]\s*TG(\d{2})\b", I)
GALARIAN_GALLERY_NUMBER = re.compile(r"\bGG(\d{1,2})\s*[/\\]\s*G?G?(\d{2})\b", I)
H_NUMBER = re.compile(r"\bH(\d{1,2})\s*[/\\]\s*H?(\d{2})\b", I)
RC_NUMBER = re.compile(r"\bRC(\d{1,2})\s*[/\\]\s*RC?(\d{2})\b", I)
RC_ONLY_NUMBER = re.compile(r"\bRC(\d{1,2})\b(?!\s*[/\\])", I)
HASH_TG_NUMBER = re.compile(r"#\s*TG(\d{1,2})\b", I)
HASH_SV_NUMBER = re.compile(r"#\s*SV(\d{1,3})\b", I)
TG_ONLY_NUMBER = re.compile(r"\bTG(\d{1,2})\b(?!\s*[/\\])", I)
GG_ONLY_NUMBER = re.compile(r"\bGG(\d{1,2})\b(?!\s*[/\\])", I)
H_ONLY_NUMBER = re.compile(r"\bH(\d{1,2})\b(?!\s*[/\\])", I)
LETTER_SUFFIX_NUMBER = re.compile(r"\b(\d{1,3})([a-z])\s*[/\\]\s*(\d{2,3})\b", I)
STANDARD_NUMBER = re.compile(r"\b(\d{1,3})\s*[/\\]\s*(\d{2,3})\b")
SV_ONLY_NUMBER = re.compile(r"\bSV(\d{1,3})\b(?!\s*[/\\])", I)
SV_PROMO_TOKEN = re.compile(r"\bSV-?P?\d{1,3}\b", I)
HASH_NUMBER = re.compile(r"#\s*(\d{1,3})\s*[/\\]\s*(\d{2,3})\b")
SLASH_CODE_NUMBER = re.compile(r"\b(\d{2,3})\s*/\s*(SV-?P|SWSH|SM|XY|BW)\b", I)
SECRET_NUMBER = re.compile(r"\b(\d{3})\s*[/\\]\s*(\d{2,3})\b")
PROMO_CODE_NUMBER = re.compile(r"\b(SVP|SWSH|SM|XY|BW|DP|HGSS)(\d{2,3})\b", I)
HASH_ONLY_NUMBER = re.compile(r"#\s*(\d{2,3})\b")
WOTC_STANDALONE_NUMBER = re.compile(
    r"\b(Base\s*Set(?:\s*2)?|Jungle|Fossil|Team\s*Rocket(?!'s)|Gym\s*Heroes|Gym\s*Challenge|"
    r"Neo\s*Genesis|Neo\s*Discovery|Neo\s*Revelation|Neo\s*Destiny|Legendary\s*Collection|"
    r"Expedition|Aquapolis|Skyridge)\s+(\d{1,3})\b",
    I,
)
WOTC_MAX_NUMBER: Final[int] = 165


def _with_total(prefix: str, tag: str, pad: bool = False):
    def extract(m: re.Match, _title: str) -> NumberHit:
        num = m.group(1)
        number = f"{prefix}{num.zfill(2) if pad else num}"
        return NumberHit(number, f"{prefix}{num}/{prefix}{m.group(2)}", tag)
    return extract


def _prefixed_only(prefix: str, tag: str, pad: bool = False, printed_prefix: str = ""):
    def extract(m: re.Match, _title: str) -> NumberHit:
        num = m.group(1)
        number = f"{prefix}{num.zfill(2) if pad else num}"
        return NumberHit(number, f"{printed_prefix}{prefix}{num}", tag)
    return extract


def _letter_suffix(m: re.Match, _title: str) -> NumberHit:
    number = f"{m.group(1)}{m.group(2).lower()}"
    return NumberHit(number, f"{number}/{m.group(3)}", "NUMBER_VARIANT")


def _numerator(tag: str):
    def extract(m: re.Match, _title: str) -> NumberHit:
        return NumberHit(m.group(1), m.group(0), tag)
    return extract


def _sv_only(m: re.Match, title: str) -> Optional[NumberHit]:
    num = int(m.group(1))
    # SV1..SV9 are set codes (SV01 = Scarlet & Violet), not Shiny Vault numbers
    if num <= 9:
        return None
    promo_token = SV_PROMO_TOKEN.search(title)
    if promo_token and "SVP" in promo_token.group(0).upper():
        return None
    if STANDARD_NUMBER.search(title):
        return None
    return NumberHit(f"SV{num}", f"SV{num}", "NUMBER_SV_ONLY")


def _slash_code(m: re.Match, _title: str) -> NumberHit:
    num = m.group(1)
    code = m.group(2).upper().replace("-", "")
    return NumberHit(num, f"{code}{num}", "NUMBER_SLASH_CODE", promo_prefix=code)


def _promo_code(m: re.Match, _title: str) -> NumberHit:
    prefix = m.group(1).upper()
    num = m.group(2)
    return NumberHit(num, f"{prefix}{num}", "NUMBER_PROMO", promo_prefix=prefix)


def _hash_only(m: re.Match, _title: str) -> NumberHit:
    return NumberHit(m.group(1), f"#{m.group(1)}", "NUMBER_HASH_ONLY")


def _wotc_standalone(m: re.Match, _title: str) -> Optional[NumberHit]:
    num = m.group(2)
    if not 1 <= int(num) <= WOTC_MAX_NUMBER:
        return None
    return NumberHit(num, num, "NUMBER_WOTC_STANDALONE")


# Most specific first. A standalone "SV75" must lose to a real n/total number,
# and subset-prefixed forms must win over the generic numerator.
CARD_NUMBER_RULES: Final[Tuple[NumberRule, ...]] = (
    NumberRule("SHINY_VAULT", SHINY_VAULT_NUMBER, _with_total("SV", "NUMBER_SHINY_VAULT")),
    NumberRule("TRAINER_GALLERY", TRAINER_GALLERY_NUMBER, _with_total("TG", "NUMBER_TRAINER_GALLERY", pad=True)),
    NumberRule("GALARIAN_GALLERY", GALARIAN_GALLERY_NUMBER, _with_total("GG", "NUMBER_GALARIAN_GALLERY", pad=True)),
    NumberRule("H_FORMAT", H_NUMBER, _with_total("H", "NUMBER_H_FORMAT")),
    NumberRule("RC_FORMAT", RC_NUMBER, _with_total("RC", "NUMBER_RC_FORMAT")),
    NumberRule("RC_ONLY", RC_ONLY_NUMBER, _prefixed_only("RC", "NUMBER_RC_ONLY")),
    NumberRule("HASH_TG", HASH_TG_NUMBER, _prefixed_only("TG", "NUMBER_HASH_TG", pad=True, printed_prefix="#")),
    NumberRule("HASH_SV", HASH_SV_NUMBER, _prefixed_only("SV", "NUMBER_HASH_SV", printed_prefix="#")),
    NumberRule("TG_ONLY", TG_ONLY_NUMBER, _prefixed_only("TG", "NUMBER_TG_ONLY", pad=True)),
    NumberRule("GG_ONLY", GG_ONLY_NUMBER, _prefixed_only("GG", "NUMBER_GG_ONLY", pad=True)),
    NumberRule("H_ONLY", H_ONLY_NUMBER, _prefixed_only("H", "NUMBER_H_ONLY")),
    NumberRule("VARIANT", LETTER_SUFFIX_NUMBER, _letter_suffix),
    NumberRule("STANDARD", STANDARD_NUMBER, _numerator("NUMBER_STANDARD")),
    NumberRule("SV_ONLY", SV_ONLY_NUMBER, _sv_only),
    NumberRule("HASH", HASH_NUMBER, _numerator("NUMBER_HASH")),
    NumberRule("SLASH_CODE", SLASH_CODE_NUMBER, _slash_code),
    NumberRule("SECRET", SECRET_NUMBER, _numerator("NUMBER_SECRET")),
    NumberRule("PROMO_CODE", PROMO_CODE_NUMBER, _promo_code),
    NumberRule("HASH_ONLY", HASH_ONLY_NUMBER, _hash_only),
    NumberRule("WOTC_STANDALONE", WOTC_STANDALONE_NUMBER, _wotc_standalone),
)

# Card-number families that count as "has a recognisable number" for the junk override
JUNK_OVERRIDE_NUMBERS: Final[Tuple[Pattern, ...]] = (
    SHINY_VAULT_NUMBER, TRAINER_GALLERY_NUMBER, GALARIAN_GALLERY_NUMBER, H_NUMBER,
    RC_NUMBER, RC_ONLY_NUMBER, HASH_TG_NUMBER, HASH_SV_NUMBER, H_ONLY_NUMBER,
    TG_ONLY_NUMBER, GG_ONLY_NUMBER, SV_ONLY_NUMBER, LETTER_SUFFIX_NUMBER,
    STANDARD_NUMBER, HASH_NUMBER, HASH_ONLY_NUMBER, SLASH_CODE_NUMBER,
)


# --------------------------------------------------------------------------
# Fakes and junk
# --------------------------------------------------------------------------

CUSTOM_FAKE = re.compile(
    r"\b(CUSTOM|CU\$TOM|PROXY|FAKE|REPLICA|UNOFFICIAL|FAN\s*MADE|ORICA|NOT\s*REAL|HANDMADE|"
    r"NOT\s*OFFICIAL|NOT\s*AUTHENTIC|REPRODUCTION|RECREATION|TRIBUTE|INSPIRED\s*BY|INSPIRED|"
    r"FANTASY|CONCEPT|HOME\s*MADE|HOMEMADE|DIY|TEMPLATE|PLACEHOLDER|DISPLAY\s*ONLY|"
    r"NOT\s*FOR\s*PLAY|DECORATIVE|NOVELTY|SOUVENIR|COLLECTIBLE\s*ONLY|ART\s*PRINT|PRINT\s*ONLY)\b",
    I,
)
FAKE_MATERIALS = re.compile(
    r"\b(METAL\s*CARD|GOLD\s*PLATED|GOLD\s*FOIL\s*CARD|SILVER\s*PLATED|ACRYLIC|PLASTIC\s*CARD|"
    r"CREDIT\s*CARD\s*SIZE|3D\s*EFFECT|3D\s*CARD|EMBOSSED\s*CARD|TEXTURED\s*HOLO|CUSTOM\s*HOLO|"
    r"ADDED\s*HOLO|HOLO\s*EFFECT|HOLOGRAPHIC\s*EFFECT|LAMINATED)\b",
    I,
)
FAKE_SUSPICIOUS = re.compile(
    r"\b(HIGH\s*QUALITY\s*COPY|QUALITY\s*REPLICA|LOOKS\s*REAL|LIKE\s*REAL|SAME\s*AS\s*REAL|"
    r"PERFECT\s*COPY|EXACT\s*COPY|BEST\s*QUALITY|TOP\s*QUALITY\s*FAKE|REPRINT|GOLD\s*VERSION|"
    r"GOLDEN\s*CARD|VMAX\s*GOLD|GX\s*GOLD|EX\s*GOLD|V\s*GOLD|RAINBOW\s*GOLD|SHINY\s*GOLD)\b",
    I,
)
FAKE_FAMILIES: Final[Tuple[Tuple[str, Pattern], ...]] = (
    ("CUSTOM_FAKE", CUSTOM_FAKE),
    ("FAKE_MATERIALS", FAKE_MATERIALS),
    ("FAKE_SUSPICIOUS", FAKE_SUSPICIOUS),
)

JUNK = re.compile(
    r"\b(LOT|BUNDLE|BULK|COLLECTION|MYSTERY|RANDOM|MIXED|ASSORTED|JOB\s*LOT|GRAB\s*BAG|"
    r"PICK\s*YOUR|CHOOSE|BINDER|SLEEVE|TOPLOADER|CASE|BOX\s*ONLY|EMPTY|POOR|HEAVY\s*PLAY|"
    r"CREASED|BENT|TORN|WATER|CUSTOM|PROXY|FAKE|REPLICA|UNOFFICIAL|FAN\s*MADE|ORICA|"
    r"BOX\s*TOPPER|JUMBO|OVERSIZED|PROMO\s*PACK|BOOSTER\s*PACK|SEALED\s*PACK|BLISTER\s*PACK|"
    r"ELITE\s*TRAINER\s*BOX|ETB|BOOSTER\s*BOX|FACTORY\s*SEALED|SEALED\s*BOX|DISPLAY\s*BOX|"
    r"BUILD\s*(?:&|AND)?\s*BATTLE|HALF\s*BOOSTER|BOOSTER\s*BUNDLE|PACKS?\s*(?:X|OF)\s*\d+|"
    r"\d+\s*PACKS?)\b",
    I,
)


# --------------------------------------------------------------------------
# Grading, variants, language, edition, card type, condition
# --------------------------------------------------------------------------

GRADED = re.compile(
    r"\b(PSA|CGC|BGS|ACE|TAG|SGC|AGS|GMA|PG|GG|MNT|HGA|KSA|CGA|RCG|UGS)\s*(\d{1,2}(?:\.\d)?)\b", I
)
GRADE_MODIFIER = re.compile(r"\b(BLACK\s*LABEL|PRISTINE|PERFECT|GEM\s*MINT|MINT)\b", I)
MAX_GRADE: Final[float] = 10.0

HOLO = re.compile(r"\b(HOLO(?:FOIL)?|HOLOFOIL)\b", I)
REVERSE_HOLO = re.compile(r"\b(REVERSE\s*HOLO(?:FOIL)?|REV\s*HOLO|REVERSE)\b", I)
FULL_ART = re.compile(r"\b(FULL\s*ART|FA)\b", I)
ALT_ART = re.compile(r"\b(ALT(?:ERNATE)?\s*ART|AA|ALTERNATIVE\s*ART)\b", I)
SECRET = re.compile(r"\b(SECRET\s*RARE|SR|GOLD\s*SECRET|HYPER\s*RARE)\b", I)
RAINBOW = re.compile(r"\b(RAINBOW\s*RARE|RAINBOW|RR)\b", I)
GOLD = re.compile(r"\b(GOLD\s*RARE|GOLD|UR)\b", I)
PROMO = re.compile(r"\b(PROMO|PROMOTIONAL|BLACK\s*STAR)\b", I)

# (VariantFlags attribute, display label, matched-pattern tag, pattern); holo and
# reverse holo are mutually exclusive and handled ahead of this table.
VARIANT_RULES: Final[Tuple[Tuple[str, str, str, Pattern], ...]] = (
    ("is_full_art", "Full Art", "VARIANT_FA", FULL_ART),
    ("is_alt_art", "Alt Art", "VARIANT_AA", ALT_ART),
    ("is_secret", "Secret", "VARIANT_SECRET", SECRET),
    ("is_rainbow", "Rainbow", "VARIANT_RAINBOW", RAINBOW),
    ("is_gold", "Gold", "VARIANT_GOLD", GOLD),
    ("is_promo", "Promo", "VARIANT_PROMO", PROMO),
)

DELTA_SPECIES = re.compile(r"[(\[]?\s*Delta\s*Species\s*[)\]]?", I)
DELTA_SPECIES_BRACKETED = re.compile(r"[(\[]delta\s*species[)\]]", I)
RARITY_PREFIX = re.compile(r"\b(SCR|SIR|SAR|AR|IR|UR|ACE\s*SPEC)\s+", I)

FIRST_EDITION = re.compile(r"\b(1ST\s*ED(?:ITION)?|FIRST\s*EDITION|1ST)\b", I)
SHADOWLESS = re.compile(r"\b(SHADOWLESS|NO\s*SHADOW)\b", I)

# (language, code, tag, pattern); English is the default
LANGUAGE_RULES: Final[Tuple[Tuple[str, str, str, Pattern], ...]] = (
    ("Japanese", "JA", "LANG_JAPANESE", re.compile(r"\b(JAPANESE|JAPAN|JPN|JP|日本語)\b", I)),
    ("Korean", "KR", "LANG_KOREAN", re.compile(r"\b(KOREAN|KOR|KR|한국어)\b", I)),
    ("Chinese", "CH", "LANG_CHINESE", re.compile(r"\b(CHINESE|CHN|CH|中文|TAIPEI)\b", I)),
)

_NOT_ERA = r"(?!\s*(?:[Ee][Rr][Aa]|[Ss][Ee][Rr][Ii][Ee][Ss]))"

# (card type, tag, pattern). Case matters for V/VMAX/VSTAR/GX/BREAK and for the
# EX (classic) versus ex (Scarlet & Violet) distinction.
CARD_TYPE_RULES: Final[Tuple[Tuple[str, str, Pattern], ...]] = (
    ("VSTAR", "TYPE_VSTAR", re.compile(r"\b(VSTAR|V\s*STAR)\b")),
    ("VMAX", "TYPE_VMAX", re.compile(r"\b(VMAX)\b")),
    ("V", "TYPE_V", re.compile(r"\bV\b(?!MAX|STAR|UNION)")),
    ("GX", "TYPE_GX", re.compile(r"\b(GX)\b")),
    ("MEGA", "TYPE_MEGA", re.compile(r"\b(MEGA|M)\s+\w+\s+EX\b", I)),
    ("ex", "TYPE_EX_LOWER", re.compile(r"\b(ex)\b" + _NOT_ERA)),
    ("EX", "TYPE_EX_UPPER", re.compile(r"\b(EX)\b" + _NOT_ERA)),
    ("Prime", "TYPE_PRIME", re.compile(r"\b(PRIME)\b", I)),
    ("LV.X", "TYPE_LV_X", re.compile(r"\b(LV\.?\s*X|LEVEL\s*X)\b", I)),
    ("Gold Star", "TYPE_GOLD_STAR", re.compile(r"\b(GOLD\s*STAR|☆)\b", I)),
    ("BREAK", "TYPE_BREAK", re.compile(r"\b(BREAK)\b")),
    ("Trainer", "TYPE_TRAINER", re.compile(r"\b(TRAINER|SUPPORTER|ITEM|STADIUM|TOOL)\b", I)),
    ("Energy", "TYPE_ENERGY", re.compile(r"\b(ENERGY)\b", I)),
)

CONDITION = re.compile(
    r"\b(NM|NEAR\s*MINT|MINT|LP|LIGHTLY\s*PLAYED|MP|MODERATELY\s*PLAYED|HP|HEAVILY\s*PLAYED|"
    r"DMG|DAMAGED|EXCELLENT|VG|VERY\s*GOOD|GOOD|POOR)\b",
    I,
)


def _condition_map() -> Mapping[str, str]:
    groups = {
        "NM": ("NM", "NEAR MINT", "NEARMINT", "NM-MINT", "NM/M", "NM-M", "MINT", "M",
               "PACK FRESH", "EXCELLENT", "EX"),
        "LP": ("LP", "LIGHTLY PLAYED", "LIGHT PLAY", "LIGHT PLAYED", "SLIGHTLY PLAYED", "SP",
               "VERY GOOD", "VG", "EX-NM"),
        "MP": ("MP", "MODERATELY PLAYED", "MODERATE PLAY", "MOD PLAYED", "PLAYED", "PL",
               "GOOD", "GD"),
        "HP": ("HP", "HEAVILY PLAYED", "HEAVY PLAY", "WELL PLAYED", "FAIR", "FR"),
        "DM": ("DM", "DMG", "DAMAGED", "POOR", "PR"),
    }
    # Lookups are keyed with whitespace removed
    return MappingProxyType({
        alias.replace(" ", ""): code for code, aliases in groups.items() for alias in aliases
    })


CONDITION_MAP: Final[Mapping[str, str]] = _condition_map()


# --------------------------------------------------------------------------
# Set names and set codes
# --------------------------------------------------------------------------

# (era, pattern) in priority order; every matching era is collected so the
# Delta Species tie-break can look at the others.
SET_ERA_RULES: Final[Tuple[Tuple[str, Pattern], ...]] = (
    ("SHINY_VAULT", re.compile(r"\b(Hidden\s*Fates|Shining\s*Fates|Paldean\s*Fates)\b", I)),
    ("WOTC", re.compile(
        r"\b(Base\s*Set(?!\s*2)|Jungle|Fossil|Team\s*Rocket(?!'s)|Gym\s*Heroes|Gym\s*Challenge|"
        r"Neo\s*Genesis|Neo\s*Discovery|Neo\s*Revelation|Neo\s*Destiny|Legendary\s*Collection|"
        r"Expedition|Aquapolis|Skyridge|Base\s*Set\s*2)\b", I)),
    ("EX_ERA", re.compile(
        r"\b(Ruby\s*(?:&|and)?\s*Sapphire|Sandstorm|Dragon(?!\s*Frontiers)|Team\s*Magma|"
        r"Team\s*Aqua|Hidden\s*Legends|FireRed\s*(?:&|and)?\s*LeafGreen|Team\s*Rocket\s*Returns|"
        r"Deoxys|Emerald|Unseen\s*Forces|Delta\s*Species|Legend\s*Maker|Holon\s*Phantoms|"
        r"Crystal\s*Guardians|Dragon\s*Frontiers|Power\s*Keepers)\b", I)),
    ("DP_ERA", re.compile(
        r"\b(Diamond\s*(?:&|and)?\s*Pearl|Mysterious\s*Treasures|Secret\s*Wonders|"
        r"Great\s*Encounters|Majestic\s*Dawn|Legends\s*Awakened|Stormfront|Platinum|"
        r"Rising\s*Rivals|Supreme\s*Victors|Arceus)\b", I)),
    ("HGSS_ERA", re.compile(
        r"\b(HeartGold\s*(?:&|and)?\s*SoulSilver|Unleashed|Undaunted|Triumphant|"
        r"Call\s*of\s*Legends)\b", I)),
    ("BW_ERA", re.compile(
        r"\b(Black\s*(?:&|and)?\s*White|Emerging\s*Powers|Noble\s*Victories|Next\s*Destinies|"
        r"Dark\s*Explorers|Dragons\s*Exalted|Boundaries\s*Crossed|Plasma\s*Storm|Plasma\s*Freeze|"
        r"Plasma\s*Blast|Legendary\s*Treasures)\b", I)),
    ("XY_ERA", re.compile(
        r"\b(XY(?!\d)|Flashfire|Furious\s*Fists|Phantom\s*Forces|Primal\s*Clash|Roaring\s*Skies|"
        r"Ancient\s*Origins|BREAKthrough|BREAKpoint|Generations|Fates\s*Collide|Steam\s*Siege|"
        r"Evolutions|Mega\s*Evolution|Phantasmal\s*Flames)\b", I)),
    ("SM_ERA", re.compile(
        r"\b(Sun\s*(?:&|and)?\s*Moon(?!\s*Hidden)|Guardians\s*Rising|Burning\s*Shadows|"
        r"Shining\s*Legends|Crimson\s*Invasion|Ultra\s*Prism|Forbidden\s*Light|Celestial\s*Storm|"
        r"Dragon\s*Majesty|Lost\s*Thunder|Team\s*Up|Unbroken\s*Bonds|Unified\s*Minds|"
        r"Cosmic\s*Eclipse)\b", I)),
    ("SWSH_ERA", re.compile(
        r"\b(Sword\s*(?:&|and)?\s*Shield(?!\s*Shining)|Rebel\s*Clash|Darkness\s*Ablaze|"
        r"Champion(?:'s)?\s*Path|Vivid\s*Voltage|Battle\s*Styles|Chilling\s*Reign|"
        r"Evolving\s*Skies|Celebrations|Fusion\s*Strike|Brilliant\s*Stars|Astral\s*Radiance|"
        r"Pokemon\s*GO|Lost\s*Origin|Silver\s*Tempest|Crown\s*Zenith)\b", I)),
    ("SV_ERA", re.compile(
        r"\b(Scarlet\s*(?:&|and)?\s*Violet(?!\s*Paldean)|Paldea\s*Evolved|Obsidian\s*Flames|"
        r"(?:Pokemon\s*)?151|Paradox\s*Rift|Temporal\s*Forces|Twilight\s*Masquerade|"
        r"Shrouded\s*Fable|Stellar\s*Crown|Surging\s*Sparks|Prismatic\s*Evolutions|"
        r"Journey\s*Together|Destined\s*Rivals|Black\s*Bolt|White\s*Flare)\b", I)),
    ("JP_SETS", re.compile(
        r"\b(Night\s*Wanderer|Mask\s*of\s*Change|Cyber\s*Judge|Wild\s*Force|Raging\s*Surf|"
        r"Ancient\s*Roar|Future\s*Flash|Shiny\s*Treasure|Clay\s*Burst|Snow\s*Hazard|Triple\s*Beat|"
        r"Violet\s*ex|Scarlet\s*ex|VSTAR\s*Universe|Incandescent\s*Arcana|Lost\s*Abyss|"
        r"Dark\s*Phantasma|Space\s*Juggler|Time\s*Gazer|Battle\s*Region|Star\s*Birth|"
        r"VMAX\s*Climax|Fusion\s*Arts|Blue\s*Sky\s*Stream|Skyscraping\s*Perfect|Eevee\s*Heroes|"
        r"Silver\s*Lance|Jet\s*Black|Peerless\s*Fighters|Matchless\s*Fighter|Single\s*Strike|"
        r"Rapid\s*Strike|Shiny\s*Star|Legendary\s*Heartbeat|Infinity\s*Zone|Explosive\s*Walker|"
        r"Rebellion\s*Crash|VMAX\s*Rising|Sword|Shield|25th\s*Anniversary)\b", I)),
    ("PROMO_TYPE", re.compile(
        r"\b(Black\s*Star\s*Promo(?:s)?|(?:SVP|SWSH|SM|XY|BW|DP|HGSS)\s*Promo(?:s)?|"
        r"(?:Box|ETB|Blister|Collection|Premium|Center|Together|Anniversary|Birthday|"
        r"McDonald'?s?|Stamped)\s*Promo)\b", I)),
)

JP_SET_CODE = re.compile(r"\b(SV\d+(?:pt\d+)?[a-z]?|SM\d+[a-z]?|XY\d+[a-z]?)\b", I)
EN_SET_CODE = re.compile(
    r"\b(SV(?:0?[1-9]|1[0-1])[BWbw]?|SV[0-9]{1,2}\.?5?|SWSH(?:1[0-2]|[1-9])|SWSH[0-9]{2,3}|"
    r"SM(?:1[0-2]|[1-9])|SM[0-9]{2,3})(?:[:;\s]|$)",
    I,
)
SUBSET_GG_NUMBER = re.compile(r"^GG\d+$", I)
SUBSET_RC_NUMBER = re.compile(r"^RC\d+$", I)

JP_SET_CODE_MAP: Final[Mapping[str, str]] = MappingProxyType({
    "sv6a": "Night Wanderer", "sv6": "Mask of Change", "sv5a": "Crimson Haze",
    "sv5k": "Wild Force", "sv5m": "Cyber Judge", "sv4a": "Shiny Treasure ex",
    "sv4k": "Ancient Roar", "sv4m": "Future Flash", "sv3a": "Raging Surf",
    "sv3": "Ruler of the Black Flame", "sv2a": "Pokemon Card 151", "sv2p": "Snow Hazard",
    "sv2d": "Clay Burst", "sv1a": "Triple Beat", "sv1s": "Scarlet ex", "sv1v": "Violet ex",
    "sv3pt5": "151", "s12a": "VSTAR Universe", "s11a": "Incandescent Arcana",
    "s11": "Lost Abyss", "s10p": "Space Juggler", "s10d": "Time Gazer",
})

EN_SET_CODE_MAP: Final[Mapping[str, str]] = MappingProxyType({
    "sv1": "Scarlet & Violet", "sv01": "Scarlet & Violet",
    "sv2": "Paldea Evolved", "sv02": "Paldea Evolved",
    "sv3": "Obsidian Flames", "sv03": "Obsidian Flames",
    "sv35": "151",
    "sv4": "Paradox Rift", "sv04": "Paradox Rift",
    "sv45": "Paldean Fates",
    "sv5": "Temporal Forces", "sv05": "Temporal Forces",
    "sv6": "Twilight Masquerade", "sv06": "Twilight Masquerade",
    "sv65": "Shrouded Fable",
    "sv7": "Stellar Crown", "sv07": "Stellar Crown",
    "sv8": "Surging Sparks", "sv08": "Surging Sparks",
    "sv85": "Prismatic Evolutions",
    "sv9": "Journey Together", "sv09": "Journey Together",
    "sv10": "Destined Rivals",
    "sv11b": "Black Bolt", "sv11w": "White Flare",
    "swsh1": "Sword & Shield", "swsh2": "Rebel Clash", "swsh3": "Darkness Ablaze",
    "swsh35": "Champion's Path", "swsh4": "Vivid Voltage", "swsh45": "Shining Fates",
    "swsh5": "Battle Styles", "swsh6": "Chilling Reign", "swsh7": "Evolving Skies",
    "swsh8": "Fusion Strike", "swsh9": "Brilliant Stars", "swsh10": "Astral Radiance",
    "swsh11": "Lost Origin", "swsh12": "Silver Tempest", "swsh125": "Crown Zenith",
    "sm1": "Sun & Moon", "sm2": "Guardians Rising", "sm3": "Burning Shadows",
    "sm35": "Shining Legends", "sm4": "Crimson Invasion", "sm5": "Ultra Prism",
    "sm6": "Forbidden Light", "sm7": "Celestial Storm", "sm75": "Dragon Majesty",
    "sm8": "Lost Thunder", "sm9": "Team Up", "sm10": "Unbroken Bonds",
    "sm11": "Unified Minds", "sm115": "Hidden Fates", "sm12": "Cosmic Eclipse",
})

PROMO_CODE_TO_SET: Final[Mapping[str, str]] = MappingProxyType({
    "SVP": "SV Black Star Promos",
    "SWSH": "SWSH Black Star Promos",
    "SM": "SM Black Star Promos",
    "XY": "XY Black Star Promos",
    "BW": "BW Black Star Promos",
    "DP": "DP Black Star Promos",
    "HGSS": "HGSS Black Star Promos",
})


# --------------------------------------------------------------------------
# Card names
# --------------------------------------------------------------------------

UNOWN_VARIANT = re.compile(r"\bUnown\s*[\[(]?\s*([A-Z!?])(?![A-Z])\s*[\])]?", I)
NIDORAN_GENDER = re.compile(r"\bNidoran\s*[\[(]?\s*(Female|Male|F|M|♀|♂)(?![A-Z])\s*[\])]?", I)
NIDORAN_FEMALE: Final[frozenset] = frozenset({"F", "FEMALE", "♀"})

TEAM_ROCKETS_NAME = re.compile(
    r"\bTeam\s*Rocket(?:'s|s)?\s+(" + _alternation(TEAM_ROCKETS_POKEMON) + r")\b", I
)
REGIONAL_NAME = re.compile(
    r"\b("
    + _alternation(f"{region}\\s+(?:{_alternation(species)})" for region, species in REGIONAL_FORMS.items())
    + r")\b",
    I,
)
DARK_NAME = re.compile(r"\b(Dark\s+(?:" + _alternation(DARK_POKEMON) + r"))\b", I)
LIGHT_NAME = re.compile(r"\b(Light\s+(?:" + _alternation(LIGHT_POKEMON) + r"))\b", I)
GIOVANNIS_NAME = re.compile(
    r"\b(Giovanni(?:'s|s)?\s+(?:" + _alternation(GIOVANNIS_POKEMON) + r"))\b", I
)
POKEMON_NAME = re.compile(r"\b(" + _alternation(POKEMON_NAMES) + r")\b", I)
TRAINER_NAME = re.compile(r"\b(" + _alternation(TRAINER_NAMES) + r")\b", I)

# Stripped before the last-resort name extraction
FALLBACK_STRIP: Final[Tuple[Pattern, ...]] = (
    GRADED, GRADE_MODIFIER,
    SHINY_VAULT_NUMBER, TRAINER_GALLERY_NUMBER, GALARIAN_GALLERY_NUMBER, RC_NUMBER,
    RC_ONLY_NUMBER, HASH_TG_NUMBER, HASH_SV_NUMBER, TG_ONLY_NUMBER, GG_ONLY_NUMBER,
    SV_ONLY_NUMBER, STANDARD_NUMBER, HASH_NUMBER, HASH_ONLY_NUMBER, SLASH_CODE_NUMBER,
    SECRET_NUMBER, PROMO_CODE_NUMBER, JP_SET_CODE,
    HOLO, REVERSE_HOLO, FULL_ART, ALT_ART, SECRET, RAINBOW, GOLD, PROMO,
    FIRST_EDITION, SHADOWLESS,
    *(rule[3] for rule in LANGUAGE_RULES),
    re.compile(
        r"\b(NM|NEAR\s*MINT|MINT|LP|LIGHTLY\s*PLAYED|MP|MODERATELY\s*PLAYED|HP|HEAVILY\s*PLAYED|"
        r"DMG|DAMAGED|VG|VERY\s*GOOD|GD|GOOD|POOR)\b", I),
    re.compile(
        r"\b(Pokemon|Card|TCG|CGC|PSA|BGS|AGS|ACE|TAG|SGC|GMA|PG|MNT|HGA|KSA|CGA|RCG|UGS|GEM|"
        r"MINT|NEAR|PERFECT|PRISTINE|LEGENDARY|AI\s*GRADE)\b", I),
    re.compile(r"\b(199[5-9]|20[01]\d|202[0-5])\b"),
    re.compile(r"\b(10|9\.5|9|8\.5|8|7\.5|7|6\.5|6|5|4|3|2|1)\b(?!\s*[/\\])"),
    re.compile(r"\b(LOW\s*POP|HIGH\s*POP|POP\s*\d+|SWIRL|ENG|JAP|JPN)\b", I),
    re.compile("[\U0001F525⭐✨\U0001F48E\U0001F31F⚡️]"),
)
NON_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\s'-]")
FALLBACK_NAME_WORDS: Final[int] = 3


# --------------------------------------------------------------------------
# Normalisation
# --------------------------------------------------------------------------

SINGLE_QUOTES = re.compile("[‘’]")
DOUBLE_QUOTES = re.compile("[“”]")
POKEMON_ACCENT = re.compile(r"pokémon", I)
WHITESPACE = re.compile(r"\s+")
MISSPELLING = re.compile(
    r"\b(" + _alternation(sorted(NAME_CORRECTIONS, key=len, reverse=True)) + r")\b", I
)
