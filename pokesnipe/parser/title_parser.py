"""Listing title parser.

Turns a free-text marketplace title into a ``ParsedTitle``. Parsing is pure:
no I/O, no mutable state, the same title always yields the same result.
"""

import re
from typing import List, Optional, Tuple

from ..core.constants import (
    SCORE_CARD_NUMBER,
    SCORE_GENERIC_NAME,
    SCORE_GRADED,
    SCORE_KNOWN_POKEMON,
    SCORE_KNOWN_TRAINER,
    SCORE_PER_VARIANT,
    SCORE_SET_NAME,
    SCORE_VARIANT_CAP,
)
from ..core.types import ConfidenceLevel, ParsedTitle, VariantFlags
from . import patterns as p
from .names import (
    NAME_CORRECTIONS,
    REGIONAL_TYPE_SUFFIXES,
    SET_NAME_CORRECTIONS,
    SPECIES_TYPE_SUFFIXES,
    STOP_WORDS,
    TRAINER_CARD_NAMES,
)

KNOWN_POKEMON_TAGS = frozenset({
    "NAME_POKEMON", "NAME_REGIONAL_POKEMON", "NAME_DARK_POKEMON", "NAME_LIGHT_POKEMON",
    "NAME_GIOVANNIS_POKEMON", "NAME_TEAM_ROCKETS", "NAME_UNOWN_VARIANT", "NAME_NIDORAN_GENDER",
})
KNOWN_TRAINER_TAGS = frozenset({"NAME_TRAINER", "NAME_TRAINER_CARD"})


def normalize_title(title: str) -> str:
    """Fold quotes and accents, collapse whitespace and fix known misspellings."""
    text = p.SINGLE_QUOTES.sub("'", title)
    text = p.DOUBLE_QUOTES.sub('"', text)
    text = p.POKEMON_ACCENT.sub("Pokemon", text)
    text = text.replace("&amp;", "&")
    text = p.WHITESPACE.sub(" ", text).strip()
    return p.MISSPELLING.sub(lambda m: NAME_CORRECTIONS[m.group(1).lower()], text)


def confidence_level(score: int) -> ConfidenceLevel:
    if score >= 85:
        return ConfidenceLevel.PERFECT
    if score >= 70:
        return ConfidenceLevel.HIGH
    if score >= 50:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


class TitleParser:
    """Extracts card attributes from listing titles."""

    def parse(self, title: str) -> ParsedTitle:
        normalized = normalize_title(title or "")
        tags: List[str] = []

        fake_families = [name for name, pattern in p.FAKE_FAMILIES if pattern.search(normalized)]
        if fake_families:
            score = 0 if "CUSTOM_FAKE" in fake_families or len(fake_families) >= 2 else 10
            return ParsedTitle(
                original_title=title,
                normalized_title=normalized,
                confidence=ConfidenceLevel.LOW,
                confidence_score=score,
                matched_patterns=tuple(fake_families),
                warnings=(f"Detected as fake/replica: {', '.join(fake_families)}",),
                is_fake=True,
            )

        if self._is_junk(normalized):
            return ParsedTitle(
                original_title=title,
                normalized_title=normalized,
                confidence=ConfidenceLevel.LOW,
                confidence_score=0,
                matched_patterns=("JUNK_LISTING",),
                warnings=("Detected as bulk/junk listing",),
                is_junk=True,
            )

        number = self.extract_card_number(normalized)
        if number:
            tags.append(number.tag)

        grading_company, grade, grade_modifier = self.extract_grading(normalized)
        is_graded = grading_company is not None
        if is_graded:
            tags.append("GRADED")

        variant = self.extract_variant(normalized, tags)
        language, language_code = self.extract_language(normalized, tags)

        is_first_edition = bool(p.FIRST_EDITION.search(normalized))
        if is_first_edition:
            tags.append("FIRST_EDITION")
        is_shadowless = bool(p.SHADOWLESS.search(normalized))
        if is_shadowless:
            tags.append("SHADOWLESS")

        card_type = self.extract_card_type(normalized, tags)

        promo_prefix = number.promo_prefix if number else None
        card_number = number.number if number else None
        set_name, set_code = self.extract_set(normalized, card_number, promo_prefix, tags)

        condition = None
        if not is_graded:
            condition = self.extract_condition(normalized)
            if condition:
                tags.append("CONDITION")

        card_name = self.extract_name(normalized, card_type, set_name, tags)

        score = self._score(card_number, set_name, card_name, is_graded, tags)
        return ParsedTitle(
            original_title=title,
            normalized_title=normalized,
            card_name=card_name,
            card_number=card_number,
            printed_number=number.printed if number else None,
            set_name=set_name,
            set_code=set_code,
            promo_prefix=promo_prefix,
            is_graded=is_graded,
            grading_company=grading_company,
            grade=grade,
            grade_modifier=grade_modifier,
            condition=condition,
            variant=variant,
            language=language,
            language_code=language_code,
            is_first_edition=is_first_edition,
            is_shadowless=is_shadowless,
            card_type=card_type,
            confidence=confidence_level(score),
            confidence_score=score,
            matched_patterns=tuple(tags),
        )

    # ------------------------------------------------------------------
    # Extraction steps
    # ------------------------------------------------------------------

    def _is_junk(self, text: str) -> bool:
        if not p.JUNK.search(text):
            return False
        # A real card number plus a slab overrides lot/bundle wording
        has_number = any(pattern.search(text) for pattern in p.JUNK_OVERRIDE_NUMBERS)
        return not (has_number and self.extract_grading(text)[0])

    def extract_card_number(self, text: str) -> Optional[p.NumberHit]:
        """First rule in ``CARD_NUMBER_RULES`` that yields a hit wins."""
        for rule in p.CARD_NUMBER_RULES:
            hit = rule.apply(text)
            if hit:
                return hit
        return None

    def extract_grading(self, text: str) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """Return (company, grade, modifier). Grades above 10 are not grades."""
        for m in p.GRADED.finditer(text):
            if float(m.group(2)) > p.MAX_GRADE:
                continue
            modifier = p.GRADE_MODIFIER.search(text)
            modifier_text = p.WHITESPACE.sub(" ", modifier.group(1).upper()) if modifier else None
            return m.group(1).upper(), m.group(2), modifier_text
        return None, None, None

    def extract_variant(self, text: str, tags: List[str]) -> VariantFlags:
        flags = {}
        labels = []
        if p.REVERSE_HOLO.search(text):
            flags["is_reverse_holo"] = True
            labels.append("Reverse Holo")
            tags.append("VARIANT_REVERSE")
        elif p.HOLO.search(text):
            flags["is_holo"] = True
            labels.append("Holo")
            tags.append("VARIANT_HOLO")

        for attr, label, tag, pattern in p.VARIANT_RULES:
            if pattern.search(text):
                flags[attr] = True
                labels.append(label)
                tags.append(tag)

        return VariantFlags(variant_name=" ".join(labels) or None, **flags)

    def extract_language(self, text: str, tags: List[str]) -> Tuple[str, str]:
        for language, code, tag, pattern in p.LANGUAGE_RULES:
            if pattern.search(text):
                tags.append(tag)
                return language, code
        return "English", "EN"

    def extract_card_type(self, text: str, tags: List[str]) -> Optional[str]:
        for card_type, tag, pattern in p.CARD_TYPE_RULES:
            if pattern.search(text):
                tags.append(tag)
                return card_type
        return None

    def extract_set(
        self,
        text: str,
        card_number: Optional[str],
        promo_prefix: Optional[str],
        tags: List[str],
    ) -> Tuple[Optional[str], Optional[str]]:
        """Return (set name, set code)."""
        if promo_prefix and promo_prefix in p.PROMO_CODE_TO_SET:
            tags.append("SET_PROMO_CODE")
            return p.PROMO_CODE_TO_SET[promo_prefix], promo_prefix

        if card_number and p.SUBSET_GG_NUMBER.match(card_number):
            tags.append("SET_GALARIAN_GALLERY")
            return "Crown Zenith", "swsh125gg"
        if card_number and p.SUBSET_RC_NUMBER.match(card_number):
            tags.append("SET_RADIANT_COLLECTION")
            return "Legendary Treasures", "bw11"

        jp_code = p.JP_SET_CODE.search(text)
        if jp_code and jp_code.group(1).lower() in p.JP_SET_CODE_MAP:
            tags.append("SET_JP_CODE")
            return p.JP_SET_CODE_MAP[jp_code.group(1).lower()], jp_code.group(1).upper()

        en_code = p.EN_SET_CODE.search(text)
        if en_code:
            code = en_code.group(1).lower().replace(".", "")
            if code in p.EN_SET_CODE_MAP:
                tags.append("SET_EN_CODE")
                return p.EN_SET_CODE_MAP[code], code

        found: List[Tuple[str, str]] = []
        for era, pattern in p.SET_ERA_RULES:
            for m in pattern.finditer(text):
                raw = m.group(1)
                corrected = SET_NAME_CORRECTIONS.get(raw.lower())
                if corrected and "SET_NAME_CORRECTED" not in tags:
                    tags.append("SET_NAME_CORRECTED")
                found.append((era, corrected or raw))
        if not found:
            return None, None

        delta = [entry for entry in found if entry[1].lower().replace(" ", "") == "deltaspecies"]
        others = [entry for entry in found if entry not in delta]
        if delta and others:
            # "Delta Species" is both an EX-era set and a card variant. It is the
            # variant when bracketed or when another EX-era set is also named.
            bracketed = p.DELTA_SPECIES_BRACKETED.search(text)
            other_ex_era = any(era == "EX_ERA" for era, _ in others)
            if bracketed or other_ex_era:
                era, name = others[0]
                tags.extend(("DELTA_SPECIES_AS_VARIANT", f"SET_{era}"))
                return name, None

        era, name = found[0]
        tags.append(f"SET_{era}")
        return name, None

    def extract_condition(self, text: str) -> Optional[str]:
        m = p.CONDITION.search(text)
        if not m:
            return None
        return p.CONDITION_MAP.get(m.group(1).upper().replace(" ", ""))

    def extract_name(
        self,
        text: str,
        card_type: Optional[str],
        set_name: Optional[str],
        tags: List[str],
    ) -> Optional[str]:
        working = text
        rarity = p.RARITY_PREFIX.search(working)
        if rarity:
            working = working[:rarity.start()] + working[rarity.end():]
            tags.append("RARITY_PREFIX_STRIPPED")
        working = p.WHITESPACE.sub(" ", p.DELTA_SPECIES.sub(" ", working)).strip()

        unown = p.UNOWN_VARIANT.search(working)
        if unown:
            tags.append("NAME_UNOWN_VARIANT")
            return f"Unown [{unown.group(1).upper()}]"

        nidoran = p.NIDORAN_GENDER.search(working)
        if nidoran:
            tags.append("NAME_NIDORAN_GENDER")
            female = nidoran.group(1).upper() in p.NIDORAN_FEMALE
            return "Nidoran♀" if female else "Nidoran♂"

        upper = working.upper()
        for card_name in TRAINER_CARD_NAMES:
            if card_name.upper() in upper:
                tags.append("NAME_TRAINER_CARD")
                return card_name

        team_rockets = p.TEAM_ROCKETS_NAME.search(working)
        if team_rockets:
            tags.append("NAME_TEAM_ROCKETS")
            return team_rockets.group(0)

        regional = p.REGIONAL_NAME.search(working)
        if regional:
            tags.append("NAME_REGIONAL_POKEMON")
            name = regional.group(1)
            if card_type in REGIONAL_TYPE_SUFFIXES:
                name = f"{name} {card_type}"
            return name

        for tag, pattern in (
            ("NAME_DARK_POKEMON", p.DARK_NAME),
            ("NAME_LIGHT_POKEMON", p.LIGHT_NAME),
            ("NAME_GIOVANNIS_POKEMON", p.GIOVANNIS_NAME),
        ):
            m = pattern.search(working)
            if m:
                tags.append(tag)
                return m.group(1)

        species = p.POKEMON_NAME.search(working)
        if species:
            tags.append("NAME_POKEMON")
            name = species.group(1)
            if card_type == "Gold Star":
                return f"{name} ☆"
            if card_type in SPECIES_TYPE_SUFFIXES:
                name = f"{name} {card_type}"
            return name

        trainer = p.TRAINER_NAME.search(working)
        if trainer:
            tags.append("NAME_TRAINER")
            return trainer.group(0)

        name = self._fallback_name(working, set_name)
        if name:
            tags.append("NAME_EXTRACTED")
        return name

    def _fallback_name(self, text: str, set_name: Optional[str]) -> Optional[str]:
        """Strip every recognised token and keep the first few leftover words."""
        remaining = text
        for pattern in p.FALLBACK_STRIP:
            remaining = pattern.sub(" ", remaining)
        if set_name:
            remaining = re.sub(re.escape(set_name), " ", remaining, flags=re.IGNORECASE)
        remaining = p.WHITESPACE.sub(" ", p.NON_NAME_CHARS.sub(" ", remaining)).strip()

        words = [
            word for word in remaining.split(" ")
            if len(word) > 1 and word.lower() not in STOP_WORDS and not word.isdigit()
        ]
        if not words:
            return None
        return " ".join(words[:p.FALLBACK_NAME_WORDS])

    def _score(
        self,
        card_number: Optional[str],
        set_name: Optional[str],
        card_name: Optional[str],
        is_graded: bool,
        tags: List[str],
    ) -> int:
        score = 0
        if card_number:
            score += SCORE_CARD_NUMBER
        if set_name:
            score += SCORE_SET_NAME
        if card_name:
            if KNOWN_POKEMON_TAGS.intersection(tags):
                score += SCORE_KNOWN_POKEMON
            elif KNOWN_TRAINER_TAGS.intersection(tags):
                score += SCORE_KNOWN_TRAINER
            else:
                score += SCORE_GENERIC_NAME
        if is_graded:
            score += SCORE_GRADED
        variant_signals = sum(1 for tag in tags if tag.startswith("VARIANT_"))
        score += min(variant_signals * SCORE_PER_VARIANT, SCORE_VARIANT_CAP)
        return min(score, 100)


title_parser = TitleParser()


def parse_title(title: str) -> ParsedTitle:
    return title_parser.parse(title)
