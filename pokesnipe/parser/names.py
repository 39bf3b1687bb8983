"""Name tables used by the title parser.

Entries are regex fragments (``\\s*`` joins multi-word names) so that spacing
variants in titles still match. Everything here is immutable and compiled once
in ``patterns``.
"""

from types import MappingProxyType
from typing import Final, Mapping, Tuple

# Generic species list. Longer names sharing a prefix come first (Mewtwo before Mew).
POKEMON_NAMES: Final[Tuple[str, ...]] = (
    "Charizard", "Pikachu", "Blastoise", "Venusaur", "Mewtwo", "Mew", "Lugia", "Ho-Oh",
    "Rayquaza", "Umbreon", "Espeon", "Gengar", "Dragonite", "Gyarados", "Alakazam",
    "Machamp", "Arcanine", "Ninetales", "Snorlax", "Lapras", "Eevee", "Vaporeon",
    "Jolteon", "Flareon", "Articuno", "Zapdos", "Moltres", "Ditto", "Aerodactyl",
    "Kabutops", "Omastar", "Tyranitar", "Celebi", "Entei", "Raikou", "Suicune", "Scizor",
    "Heracross", "Kingdra", "Ampharos", "Feraligatr", "Typhlosion", "Meganium", "Groudon",
    "Kyogre", "Latios", "Latias", "Deoxys", "Jirachi", "Dialga", "Palkia", "Giratina",
    "Arceus", "Darkrai", "Shaymin", "Reshiram", "Zekrom", "Kyurem", "Xerneas", "Yveltal",
    "Zygarde", "Solgaleo", "Lunala", "Necrozma", "Zacian", "Zamazenta", "Eternatus",
    "Calyrex", "Miraidon", "Koraidon", "Terapagos", "Hatterene", "Persian", "Gardevoir",
    "Sylveon", "Lucario", "Greninja", "Mimikyu", "Cinderace", "Inteleon", "Rillaboom",
    "Poliwrath", "Blissey", "Luxray", "Boltund", "Empoleon", "Glaceon", "Leafeon",
    "Rockruff", "Lycanroc", "Spidops", "Giovanni",
    r"Gouging\s*Fire", r"Iron\s*Crown", r"Roaring\s*Moon", r"Iron\s*Valiant",
    r"Walking\s*Wake", r"Iron\s*Leaves", r"Great\s*Tusk", r"Iron\s*Treads",
    r"Scream\s*Tail", r"Iron\s*Bundle", r"Flutter\s*Mane", r"Iron\s*Moth",
    r"Slither\s*Wing", r"Sandy\s*Shocks", r"Iron\s*Jugulis", r"Iron\s*Thorns",
    r"Brute\s*Bonnet", "Chi-Yu", "Chien-Pao", "Ting-Lu", "Wo-Chien",
    "Bulbasaur", "Ivysaur", "Charmander", "Charmeleon", "Squirtle", "Wartortle",
    "Caterpie", "Metapod", "Butterfree", "Weedle", "Kakuna", "Beedrill", "Pidgey",
    "Pidgeotto", "Pidgeot", "Rattata", "Raticate", "Spearow", "Fearow", "Ekans", "Arbok",
    "Raichu", "Sandshrew", "Sandslash", "Nidoran", "Nidorina", "Nidoqueen", "Nidorino",
    "Nidoking", "Clefairy", "Clefable", "Vulpix", "Jigglypuff", "Wigglytuff", "Zubat",
    "Golbat", "Oddish", "Gloom", "Vileplume", "Paras", "Parasect", "Venonat", "Venomoth",
    "Diglett", "Dugtrio", "Meowth", "Psyduck", "Golduck", "Mankey", "Primeape",
    "Growlithe", "Poliwag", "Poliwhirl", "Abra", "Kadabra", "Machop", "Machoke",
    "Bellsprout", "Weepinbell", "Victreebel", "Tentacool", "Tentacruel", "Geodude",
    "Graveler", "Golem", "Ponyta", "Rapidash", "Slowpoke", "Slowbro", "Magnemite",
    "Magneton", "Farfetch'd", "Doduo", "Dodrio", "Seel", "Dewgong", "Grimer", "Muk",
    "Shellder", "Cloyster", "Gastly", "Haunter", "Onix", "Drowzee", "Hypno", "Krabby",
    "Kingler", "Voltorb", "Electrode", "Exeggcute", "Exeggutor", "Cubone", "Marowak",
    "Hitmonlee", "Hitmonchan", "Lickitung", "Koffing", "Weezing", "Rhyhorn", "Rhydon",
    "Chansey", "Tangela", "Kangaskhan", "Horsea", "Seadra", "Goldeen", "Seaking",
    "Staryu", "Starmie", r"Mr\.\s*Mime", "Scyther", "Jynx", "Electabuzz", "Magmar",
    "Pinsir", "Tauros", "Magikarp", "Dratini", "Dragonair", "Porygon", "Omanyte",
    "Kabuto", "Dondozo", "Tatsugiri", "Palafin", "Flamigo", "Cetitan", "Veluza",
    "Orthworm", "Glimmora", "Greavard", "Houndstone", "Annihilape", "Clodsire",
    "Farigiraf", "Dudunsparce", "Kingambit", "Rosa",
)

REGIONAL_FORMS: Final[Mapping[str, Tuple[str, ...]]] = MappingProxyType({
    "Galarian": (
        "Rapidash", "Ponyta", "Farfetch'd", "Sirfetch'd", "Weezing", "Slowpoke", "Slowbro",
        "Slowking", "Corsola", "Cursola", "Zigzagoon", "Linoone", "Obstagoon", "Darumaka",
        "Darmanitan", "Yamask", "Runerigus", "Stunfisk", r"Mr\.\s*Mime", r"Mr\.\s*Rime",
        "Articuno", "Zapdos", "Moltres", "Meowth", "Perrserker", "Persian",
    ),
    "Alolan": (
        "Raichu", "Sandshrew", "Sandslash", "Vulpix", "Ninetales", "Diglett", "Dugtrio",
        "Meowth", "Persian", "Geodude", "Graveler", "Golem", "Grimer", "Muk", "Exeggutor",
        "Marowak", "Rattata", "Raticate",
    ),
    "Hisuian": (
        "Growlithe", "Arcanine", "Voltorb", "Electrode", "Typhlosion", "Qwilfish",
        "Overqwil", "Sneasel", "Sneasler", "Samurott", "Lilligant", "Basculin",
        "Basculegion", "Zorua", "Zoroark", "Braviary", "Sliggoo", "Goodra", "Avalugg",
        "Decidueye",
    ),
    "Paldean": ("Wooper", "Tauros"),
})

DARK_POKEMON: Final[Tuple[str, ...]] = (
    "Alakazam", "Arbok", "Blastoise", "Celebi", "Charizard", "Crobat", "Dragonite",
    "Dugtrio", "Electrode", "Espeon", "Feraligatr", "Flaaffy", "Flareon", "Forretress",
    "Gengar", "Gloom", "Golbat", "Golduck", "Golem", "Gyarados", "Haunter", "Houndoom",
    "Hypno", "Jolteon", "Machamp", "Machoke", "Magneton", "Magcargo", "Muk", "Omastar",
    "Octillery", "Persian", "Porygon2", "Primeape", "Pupitar", "Quilava", "Raichu",
    "Rapidash", "Raticate", "Scizor", "Slowbro", "Slowking", "Typhlosion", "Tyranitar",
    "Ursaring", "Vaporeon", "Vileplume", "Wartortle", "Weezing",
)

LIGHT_POKEMON: Final[Tuple[str, ...]] = (
    "Arcanine", "Azumarill", "Dragonair", "Dragonite", "Espeon", "Flareon", "Golduck",
    "Jolteon", "Lanturn", "Ledian", "Machamp", "Ninetales", "Pikachu", "Piloswine", "Sunflora",
    "Togetic", "Vaporeon", "Venomoth", "Wigglytuff",
)

GIOVANNIS_POKEMON: Final[Tuple[str, ...]] = (
    "Gyarados", "Machamp", "Nidoking", "Nidoqueen", "Persian", "Mewtwo",
)

TEAM_ROCKETS_POKEMON: Final[Tuple[str, ...]] = (
    "Tyranitar", "Giovanni", "Moltres", "Spidops", "Meowth", "Arbok", "Weezing", "Persian",
    "Wobbuffet", "Mimikyu", "Hitmonlee", "Hitmonchan", "Hitmontop", "Machamp", "Primeape",
    "Exeggutor", "Marowak", "Kangaskhan", "Electabuzz", "Magmar", "Pinsir", "Tauros",
    "Ditto", "Porygon", "Snorlax", "Munchlax",
)

TRAINER_NAMES: Final[Tuple[str, ...]] = (
    r"Professor(?:'s)?\s*(?:Oak|Elm|Birch|Rowan|Juniper|Sycamore|Kukui|Magnolia|Research)",
    "Cynthia", "N", "Marnie", r"Boss(?:'s)?\s*Orders", "Guzma", "Lysandre", "Giovanni",
    "Steven", "Champion", r"Gym\s*Leader", r"Elite\s*Four",
)

# Non-Pokemon card names matched as plain substrings, longest-specific first
# where one contains another.
TRAINER_CARD_NAMES: Final[Tuple[str, ...]] = (
    "Crystal Shard", "Crystal Beach", "Crystal Wall", "Ancient Ruins", "Mirage Stadium",
    "Pokemon Tower", "Radio Tower", "Battle Frontier", "Desert Ruins", "Underground Lake",
    "Underground Expedition", "Fisherman", "Energy Search", "Super Energy Removal",
    "Energy Removal", "Pokemon Breeder", "Pokemon Trader", "Computer Search",
    "Item Finder", "Pokemon Center", "Professor Oak's Research", "Professor Oak", "Bill",
)

# Card types that are re-attached to a matched species name
REGIONAL_TYPE_SUFFIXES: Final[Tuple[str, ...]] = ("V", "VMAX", "VSTAR", "EX", "ex", "GX")
SPECIES_TYPE_SUFFIXES: Final[Tuple[str, ...]] = REGIONAL_TYPE_SUFFIXES + ("Gold Star", "LV.X")

NAME_CORRECTIONS: Final[Mapping[str, str]] = MappingProxyType({
    "ninetails": "Ninetales", "ninetail": "Ninetales", "magikrap": "Magikarp",
    "riachu": "Raichu", "alakazm": "Alakazam", "alkazam": "Alakazam",
    "slowbrow": "Slowbro", "machmap": "Machamp", "hauntr": "Haunter", "genger": "Gengar",
    "genagar": "Gengar", "dragonaire": "Dragonair", "wigglytuf": "Wigglytuff",
    "vileplum": "Vileplume", "primeap": "Primeape", "kirila": "Kirlia", "kirla": "Kirlia",
    "tentactuel": "Tentacruel", "tentacrul": "Tentacruel", "revaroom": "Revavroom",
    "charazard": "Charizard", "charziard": "Charizard", "charrizard": "Charizard",
    "pickachu": "Pikachu", "pikachuu": "Pikachu", "blastois": "Blastoise",
    "venasaur": "Venusaur", "vensaur": "Venusaur", "mewtow": "Mewtwo", "mewto": "Mewtwo",
    "rayquasa": "Rayquaza", "rayquza": "Rayquaza", "gyrados": "Gyarados",
    "gyardos": "Gyarados", "dragonit": "Dragonite", "arcanin": "Arcanine",
    "umbrean": "Umbreon", "espean": "Espeon", "sylvean": "Sylveon", "glacean": "Glaceon",
    "leafean": "Leafeon", "vaporean": "Vaporeon", "joltean": "Jolteon",
    "flarean": "Flareon", "lucarion": "Lucario", "gardevior": "Gardevoir",
    "gardivior": "Gardevoir", "giritina": "Giratina", "girtina": "Giratina",
    "dialag": "Dialga", "palkiah": "Palkia", "zekram": "Zekrom", "reshram": "Reshiram",
    "typhlosian": "Typhlosion", "feraligator": "Feraligatr", "feraligtr": "Feraligatr",
    "arodactyl": "Aerodactyl", "kabuotps": "Kabutops", "tyranitaur": "Tyranitar",
    "tyranater": "Tyranitar", "scizur": "Scizor", "snorlex": "Snorlax",
    "snrolax": "Snorlax", "celebii": "Celebi", "meww": "Mew", "arcanas": "Arceus",
    "darkri": "Darkrai", "jirach": "Jirachi", "deoxis": "Deoxys", "grouden": "Groudon",
    "kyoger": "Kyogre",
})

SET_NAME_CORRECTIONS: Final[Mapping[str, str]] = MappingProxyType({
    "phantasmal flames": "Mega Evolution",
    "phantom flame": "Phantom Forces",
    "fates collides": "Fates Collide",
    "primal clashes": "Primal Clash",
    "roaring sky": "Roaring Skies",
    "ancient origin": "Ancient Origins",
    "burning shadow": "Burning Shadows",
    "guardians rise": "Guardians Rising",
    "team rockets": "Team Rocket",
    "mcdonald's 25th anniversary": "McDonald's Collection 2021",
    "mcdonalds 25th anniversary": "McDonald's Collection 2021",
    "mcdonald 25th anniversary": "McDonald's Collection 2021",
    "25th anniversary mcdonald": "McDonald's Collection 2021",
    "mcdonald's promo": "McDonald's Collection",
    "mcdonalds promo": "McDonald's Collection",
    "prismatic evolution": "Prismatic Evolutions",
})

# Words that never form part of a card name in the last-resort extraction
STOP_WORDS: Final[frozenset] = frozenset({
    # noise
    "the", "and", "or", "a", "an", "of", "for", "in", "on", "at", "to", "plz", "read",
    "description", "look", "see", "great", "nice", "hot", "wow", "no", "with", "grey",
    "gray", "felt", "hat", "van", "gogh", "x5", "x4", "x3", "x2", "x1", "plus", "anniv",
    "anniversary",
    # set words
    "base", "set", "series", "edition", "scarlet", "violet", "sword", "shield", "sun", "moon",
    # rarity words
    "rare", "common", "uncommon", "illustration", "full", "art", "special", "ultra",
    "secret", "amazing", "shiny", "vault",
    # card descriptors
    "card", "cards", "pokemon", "tcg", "wotc", "english", "original", "vintage", "classic",
    "trainer", "supporter", "item", "stadium", "tool", "gallery", "tail", "swirl", "crystal",
    "free", "case", "bonus", "included",
    # grading and condition
    "unlimited", "grade", "graded", "premium", "tournament", "stamped", "center", "promo",
    "promos", "master", "strike", "rapid", "single", "booster", "pack", "condition", "mint",
    "near", "slabs", "slab", "raw", "sealed", "forme", "origin", "complete", "collection",
    # japanese markers
    "jp", "japanese", "jap", "jpn", "s-p", "sv-p", "swsh",
    # ordinals and numbers
    "1st", "2nd", "3rd", "4th", "5th", "25th", "151",
    # standalone regional prefixes
    "galarian", "alolan", "hisuian", "paldean", "mega", "evolution",
    # era abbreviations
    "sv", "sm", "xy", "bw", "dp", "ex", "lv",
    # printing words
    "regular", "non", "holo", "reverse", "non-holo", "nonholo",
    # japanese set names seen in english titles
    "white", "flare", "burst", "jet", "black", "silver", "tempest", "lance", "wild", "force",
    # seller noise
    "seller", "uk", "fresh",
})
