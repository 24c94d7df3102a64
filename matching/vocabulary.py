#!/usr/bin/env python3
"""
Vocabulary - Controlled vocabulary and synonym tables for matching.

Holds the static lookup data used by skills matching, career path
resolution, experience levels and location matching. Tables are built
once into a frozen Vocabulary and passed by reference into the scoring
functions.
"""

from functools import lru_cache
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple
import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from matching.utils import normalize_slug

logger = logging.getLogger(__name__)


class CareerPathEntry(BaseModel):
    """One career path of the controlled vocabulary."""
    model_config = ConfigDict(frozen=True)

    slug: str                      # short form stored on users and jobs, e.g. "finance"
    label: str                     # display label, e.g. "Finance & Investment"
    database_category: str         # long form category, e.g. "finance-investment"
    aliases: Tuple[str, ...]       # categories counted as the same path
    synonyms: Tuple[str, ...]      # related terms (synonym / partial tiers)


_CAREER_PATHS = (
    CareerPathEntry(
        slug="strategy", label="Strategy & Business Design",
        database_category="strategy-business-design",
        aliases=("strategy", "business-design", "consulting"),
        synonyms=("strategy", "business-design", "consulting", "management", "planning"),
    ),
    CareerPathEntry(
        slug="data", label="Data & Analytics",
        database_category="data-analytics",
        aliases=("data", "analytics", "data-science"),
        synonyms=("data", "analytics", "data-science", "bi", "business-intelligence", "insights"),
    ),
    CareerPathEntry(
        slug="sales", label="Sales & Client Success",
        database_category="sales-client-success",
        aliases=("sales", "business-development", "client-success"),
        synonyms=("sales", "business-development", "client-success", "account-management", "revenue"),
    ),
    CareerPathEntry(
        slug="marketing", label="Marketing & Growth",
        database_category="marketing-growth",
        aliases=("marketing", "growth", "brand"),
        synonyms=("marketing", "growth", "brand", "content", "social", "campaign"),
    ),
    CareerPathEntry(
        slug="finance", label="Finance & Investment",
        database_category="finance-investment",
        aliases=("finance", "accounting", "investment"),
        synonyms=("finance", "accounting", "investment", "fp&a", "financial", "budget"),
    ),
    CareerPathEntry(
        slug="operations", label="Operations & Supply Chain",
        database_category="operations-supply-chain",
        aliases=("operations", "supply-chain", "logistics"),
        synonyms=("operations", "supply-chain", "logistics", "procurement", "efficiency"),
    ),
    CareerPathEntry(
        slug="product", label="Product & Innovation",
        database_category="product-innovation",
        aliases=("product", "product-management", "innovation"),
        synonyms=("product", "product-management", "innovation", "roadmap", "features"),
    ),
    CareerPathEntry(
        slug="tech", label="Tech & Transformation",
        database_category="tech-transformation",
        aliases=("tech", "technology", "transformation", "it"),
        synonyms=("tech", "technology", "transformation", "it", "digital", "software"),
    ),
    CareerPathEntry(
        slug="sustainability", label="Sustainability & ESG",
        database_category="sustainability-esg",
        aliases=("sustainability", "esg", "environmental", "social"),
        synonyms=("sustainability", "esg", "environmental", "social", "governance", "csr"),
    ),
    CareerPathEntry(
        slug="unsure", label="Not Sure Yet / General",
        database_category="all-categories",
        aliases=("general", "graduate", "trainee", "rotational"),
        synonyms=("general", "graduate", "trainee", "rotational", "development"),
    ),
)

# Legacy form labels still present in old profiles
_LEGACY_CAREER_LABELS = {
    "tech & engineering": "tech",
    "technology": "tech",
}

_SKILL_SYNONYMS = {
    "javascript": ("js", "es6", "es2015", "typescript", "ts", "node", "nodejs", "react", "vue", "angular"),
    "python": ("django", "flask", "pandas", "numpy", "tensorflow", "pytorch"),
    "react": ("reactjs", "nextjs", "redux", "hooks", "jsx"),
    "node": ("nodejs", "express", "npm", "javascript"),
    "aws": ("amazon web services", "ec2", "s3", "lambda", "cloudformation"),
    "docker": ("kubernetes", "k8s", "containers", "microservices"),
    "sql": ("mysql", "postgresql", "mongodb", "database", "oracle"),
    "marketing": ("growth", "seo", "content", "social media", "analytics"),
    "finance": ("accounting", "investment", "fp&a", "analysis", "banking"),
    "design": ("ui", "ux", "figma", "sketch", "photoshop", "illustrator"),
}

_EXPERIENCE_LEVELS = {
    "internship": 0,
    "intern": 0,
    "working-student": 0,
    "placement": 0,
    "entry": 1,
    "entry-level": 1,
    "junior": 1,
    "graduate": 1,
    "grad": 1,
    "graduate-scheme": 1,
    "graduate-programme": 1,
    "mid": 2,
    "mid-level": 2,
    "intermediate": 2,
    "senior": 3,
    "lead": 4,
    "principal": 4,
    "manager": 5,
    "director": 6,
}

_COUNTRY_ALIASES = {
    "gb": "united kingdom", "uk": "united kingdom", "eng": "united kingdom",
    "england": "united kingdom", "scotland": "united kingdom", "wales": "united kingdom",
    "northern ireland": "united kingdom", "great britain": "united kingdom",
    "ie": "ireland", "irl": "ireland", "eire": "ireland", "éire": "ireland",
    "republic of ireland": "ireland",
    "fr": "france",
    "de": "germany", "deutschland": "germany",
    "es": "spain", "españa": "spain",
    "it": "italy", "italia": "italy",
    "nl": "netherlands", "holland": "netherlands", "the netherlands": "netherlands",
    "be": "belgium", "belgië": "belgium", "belgique": "belgium",
    "ch": "switzerland", "schweiz": "switzerland", "suisse": "switzerland",
    "se": "sweden", "sverige": "sweden",
    "dk": "denmark", "danmark": "denmark",
    "at": "austria", "österreich": "austria",
    "cz": "czech republic", "czechia": "czech republic",
    "pl": "poland", "polska": "poland",
}

_CITY_COUNTRIES = {
    "london": "united kingdom", "manchester": "united kingdom", "birmingham": "united kingdom",
    "edinburgh": "united kingdom", "belfast": "united kingdom",
    "dublin": "ireland", "cork": "ireland",
    "paris": "france", "lyon": "france",
    "berlin": "germany", "munich": "germany", "hamburg": "germany", "frankfurt": "germany",
    "madrid": "spain", "barcelona": "spain",
    "rome": "italy", "milan": "italy",
    "amsterdam": "netherlands", "rotterdam": "netherlands",
    "brussels": "belgium",
    "zurich": "switzerland", "geneva": "switzerland",
    "stockholm": "sweden",
    "copenhagen": "denmark",
    "vienna": "austria",
    "prague": "czech republic",
    "warsaw": "poland",
}

_EUROPEAN_CITIES = (
    "london", "paris", "berlin", "amsterdam", "barcelona", "madrid", "rome", "munich",
)

_EUROPEAN_COUNTRY_HINTS = (
    "europe", "germany", "france", "spain", "italy", "netherlands",
)

_TOP_EMPLOYERS = ("google", "microsoft", "amazon", "apple")
_PROFESSIONAL_SERVICES_HINTS = ("consulting", "investment")
_STABLE_ROLE_HINTS = ("permanent", "full-time", "fte")

_GROWTH_KEYWORDS = (
    "growth", "development", "progression", "learning", "training",
    "mentorship", "career advancement",
)
_GROWTH_STAGE_HINTS = ("startup", "scaleup", "series")

_REMOTE_TAGS = ("remote", "hybrid")


def _read_only(table: Mapping) -> Mapping:
    return MappingProxyType(dict(table))


class Vocabulary(BaseModel):
    """
    Immutable lookup tables shared by every scoring call.

    Read-only after construction; safe to share across threads.
    """
    model_config = ConfigDict(frozen=True)

    career_paths: Tuple[CareerPathEntry, ...] = _CAREER_PATHS
    legacy_career_labels: Mapping[str, str] = Field(default_factory=lambda: _read_only(_LEGACY_CAREER_LABELS))
    skill_synonyms: Mapping[str, Tuple[str, ...]] = Field(default_factory=lambda: _read_only(_SKILL_SYNONYMS))
    experience_levels: Mapping[str, int] = Field(default_factory=lambda: _read_only(_EXPERIENCE_LEVELS))
    neutral_experience_level: int = 2
    country_aliases: Mapping[str, str] = Field(default_factory=lambda: _read_only(_COUNTRY_ALIASES))
    city_countries: Mapping[str, str] = Field(default_factory=lambda: _read_only(_CITY_COUNTRIES))
    european_cities: Tuple[str, ...] = _EUROPEAN_CITIES
    european_country_hints: Tuple[str, ...] = _EUROPEAN_COUNTRY_HINTS
    top_employers: Tuple[str, ...] = _TOP_EMPLOYERS
    professional_services_hints: Tuple[str, ...] = _PROFESSIONAL_SERVICES_HINTS
    stable_role_hints: Tuple[str, ...] = _STABLE_ROLE_HINTS
    growth_keywords: Tuple[str, ...] = _GROWTH_KEYWORDS
    growth_stage_hints: Tuple[str, ...] = _GROWTH_STAGE_HINTS
    remote_tags: Tuple[str, ...] = _REMOTE_TAGS

    @field_validator(
        "legacy_career_labels", "skill_synonyms", "experience_levels",
        "country_aliases", "city_countries",
        mode="after",
    )
    @classmethod
    def _freeze_tables(cls, value: Mapping) -> Mapping:
        return _read_only(value)

    def career_path(self, slug: str) -> Optional[CareerPathEntry]:
        """Look up a career path entry by its short slug."""
        for entry in self.career_paths:
            if entry.slug == slug:
                return entry
        return None

    def resolve_career_path(self, value: str) -> str:
        """
        Map a form value, display label or database category to the short slug.

        Unknown values are returned lowercased so they still match
        identically-tagged jobs.
        """
        text = value.strip().lower()
        if text in self.legacy_career_labels:
            return self.legacy_career_labels[text]
        slug = normalize_slug(text)
        for entry in self.career_paths:
            if text == entry.label.lower() or slug in (entry.slug, entry.database_category):
                return entry.slug
        return text

    def skill_synonyms_for(self, keyword: str) -> FrozenSet[str]:
        """
        Synonyms of a skill keyword in both directions.

        "javascript" yields "react", "node", ...; "react" also yields
        "javascript" because it lists it as a synonym.
        """
        synonyms = set(self.skill_synonyms.get(keyword, ()))
        for root, terms in self.skill_synonyms.items():
            if keyword in terms:
                synonyms.add(root)
        synonyms.discard(keyword)
        return frozenset(synonyms)

    def experience_level(self, value: Optional[str]) -> Optional[int]:
        """
        Position of an experience string on the hierarchy, None if unmapped.

        Exact lookups win; otherwise the first recognised word of the string
        decides ("Graduate Analyst Programme" -> graduate).
        """
        if not value:
            return None
        slug = normalize_slug(value)
        if slug in self.experience_levels:
            return self.experience_levels[slug]
        for word in slug.replace("-", " ").split():
            if word in self.experience_levels:
                return self.experience_levels[word]
        return None

    def normalize_country(self, value: Optional[str]) -> str:
        text = (value or "").strip().lower()
        return self.country_aliases.get(text, text)

    def country_for_city(self, city: str) -> Optional[str]:
        return self.city_countries.get(city.strip().lower())

    def is_european_city(self, value: str) -> bool:
        text = value.lower()
        return any(city in text for city in self.european_cities)


@lru_cache(maxsize=1)
def default_vocabulary() -> Vocabulary:
    """Build the shared vocabulary once per process."""
    vocabulary = Vocabulary()
    logger.debug(
        f"Loaded vocabulary: {len(vocabulary.career_paths)} career paths, "
        f"{len(vocabulary.skill_synonyms)} skill synonym groups"
    )
    return vocabulary
