#!/usr/bin/env python3
"""
Relevance Scoring - Skills, experience, career path and location sub-terms.

Relevance = 0.4*skills + 0.3*experience + 0.2*career_path + 0.1*location
(weights configurable), each sub-term bounded to [0, 100] before weighting.

Every function is a pure function of (job, user, vocabulary); missing data
on either side yields a neutral value instead of an error.
"""

from typing import List, Tuple
import logging

from matching.config_loader import RelevanceWeights
from matching.models import Job, UserPreferences
from matching.scorer.models import RelevanceBreakdown
from matching.utils import clamp, contains_term, normalize_slug, split_keywords, tokenize
from matching.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

# Match tiers shared by skills and career path matching
SKILL_DIRECT_SCORE = 100.0
SKILL_SYNONYM_SCORE = 85.0
SKILL_PARTIAL_SCORE = 70.0
PARTIAL_MIN_LENGTH = 4

CATEGORY_EXACT_SCORE = 100.0
CATEGORY_SYNONYM_SCORE = 90.0
CATEGORY_PARTIAL_SCORE = 70.0
CATEGORY_MATCHED_THRESHOLD = 60.0
CATEGORY_STRONG_THRESHOLD = 80.0

NEUTRAL_EXPERIENCE_SCORE = 50.0
NEUTRAL_CAREER_PATH_SCORE = 40.0
NEUTRAL_LOCATION_SCORE = 50.0


def _keyword_score(
    keyword: str,
    job_text: str,
    job_words: List[str],
    vocabulary: Vocabulary
) -> float:
    if keyword in job_text:
        return SKILL_DIRECT_SCORE

    synonyms = vocabulary.skill_synonyms_for(keyword)
    if any(contains_term(job_text, synonym) for synonym in synonyms):
        return SKILL_SYNONYM_SCORE

    for word in job_words:
        if keyword in word and len(keyword) >= PARTIAL_MIN_LENGTH:
            return SKILL_PARTIAL_SCORE
        if word in keyword and len(word) >= PARTIAL_MIN_LENGTH:
            return SKILL_PARTIAL_SCORE

    return 0.0


def calculate_skills_score(job: Job, user: UserPreferences, vocabulary: Vocabulary) -> float:
    """
    Score the user's comma-separated keywords against title + description.

    Per keyword: 100 literal hit, 85 synonym hit, 70 partial-word hit, else 0.
    Result = average over all keywords + min(25, matched * 4), capped at 100.
    No keywords scores 0.
    """
    keywords = split_keywords(user.career_keywords)
    if not keywords:
        return 0.0

    job_text = job.text
    job_words = tokenize(job_text)

    total_score = 0.0
    matched_keywords = 0
    for keyword in keywords:
        keyword_score = _keyword_score(keyword, job_text, job_words, vocabulary)
        if keyword_score > 0:
            total_score += keyword_score
            matched_keywords += 1

    if matched_keywords == 0:
        return 0.0

    average_score = total_score / len(keywords)
    coverage_bonus = min(25, matched_keywords * 4)
    return clamp(average_score + coverage_bonus)


def calculate_experience_score(job: Job, user: UserPreferences, vocabulary: Vocabulary) -> float:
    """
    Compare experience levels on the internship..director hierarchy.

    100 at distance 0, 80 at distance 1, 65 at distance 2 when the job is
    the higher level (room to grow), 25 otherwise. Unmapped levels sit at
    the neutral level; missing values on either side score 50.
    """
    if not user.entry_level_preference or not job.experience_required:
        return NEUTRAL_EXPERIENCE_SCORE

    neutral = vocabulary.neutral_experience_level
    user_level = vocabulary.experience_level(user.entry_level_preference)
    job_level = vocabulary.experience_level(job.experience_required)
    if user_level is None:
        user_level = neutral
    if job_level is None:
        job_level = neutral

    level_difference = abs(user_level - job_level)
    if level_difference == 0:
        return 100.0
    if level_difference == 1:
        return 80.0
    if level_difference == 2 and user_level < job_level:
        return 65.0
    return 25.0


def category_matches_career_path(category: str, career_path: str, vocabulary: Vocabulary) -> bool:
    """Exact controlled-vocabulary match between a job category and a career path."""
    category_slug = normalize_slug(category)
    entry = vocabulary.career_path(career_path)
    if entry is None:
        return category_slug == normalize_slug(career_path)
    return (
        category_slug in (entry.slug, entry.database_category)
        or category_slug in entry.aliases
    )


def category_match_score(category: str, career_path: str, vocabulary: Vocabulary) -> float:
    """100 exact, 90 synonym hit, 70 partial word-stem hit, else 0."""
    if category_matches_career_path(category, career_path, vocabulary):
        return CATEGORY_EXACT_SCORE

    entry = vocabulary.career_path(career_path)
    synonyms = entry.synonyms if entry else (normalize_slug(career_path),)
    category_slug = normalize_slug(category)

    for synonym in synonyms:
        if contains_term(category_slug, synonym):
            return CATEGORY_SYNONYM_SCORE

    for synonym in synonyms:
        for word in synonym.split("-"):
            if len(word) >= PARTIAL_MIN_LENGTH and word in category_slug:
                return CATEGORY_PARTIAL_SCORE

    return 0.0


def calculate_career_path_score(job: Job, user: UserPreferences, vocabulary: Vocabulary) -> float:
    """
    Average best category match plus coverage and strong-match bonuses.

    Coverage bonus: up to 25, proportional to the fraction of the user's
    career paths matched (>= 60) by at least one category.
    Strong-match bonus: 5 per category whose best match is >= 80, up to 20.
    """
    career_paths = user.career_path
    categories = job.categories
    if not career_paths or not categories:
        return NEUTRAL_CAREER_PATH_SCORE

    total_relevance = 0.0
    strong_matches = 0
    matched_paths = set()

    for category in categories:
        best_match = 0.0
        for career_path in career_paths:
            score = category_match_score(category, career_path, vocabulary)
            best_match = max(best_match, score)
            if score >= CATEGORY_MATCHED_THRESHOLD:
                matched_paths.add(career_path)
        total_relevance += best_match
        if best_match >= CATEGORY_STRONG_THRESHOLD:
            strong_matches += 1

    average_relevance = total_relevance / len(categories)
    coverage_bonus = min(25.0, len(matched_paths) / len(career_paths) * 25.0)
    strong_match_bonus = min(20.0, strong_matches * 5.0)

    return clamp(average_relevance + coverage_bonus + strong_match_bonus)


def _job_is_european(job_city: str, job_country: str, vocabulary: Vocabulary) -> bool:
    if vocabulary.is_european_city(job_city):
        return True
    if any(hint in job_country for hint in vocabulary.european_country_hints):
        return True
    return bool(job_country) and job_country in vocabulary.city_countries.values()


def calculate_location_score(job: Job, user: UserPreferences, vocabulary: Vocabulary) -> float:
    """
    Tiered location match against the user's target cities.

    100 city match, 75 country match, 50 both sides in Europe,
    35 remote/hybrid, 15 otherwise; no stated preference scores 50.
    """
    target_cities = [c.lower() for c in user.target_cities]
    if not target_cities:
        return NEUTRAL_LOCATION_SCORE

    job_city = job.city.lower()
    job_location = job.location.lower()
    job_country = vocabulary.normalize_country(job.country)

    for city in target_cities:
        if city in job_city or city in job_location:
            return 100.0

    for city in target_cities:
        target_country = vocabulary.country_for_city(city) or vocabulary.normalize_country(city)
        if job_country and (city in job_country or target_country == job_country):
            return 75.0
        if target_country and contains_term(job_location, target_country):
            return 75.0

    if _job_is_european(job_city, job_country, vocabulary):
        if any(vocabulary.is_european_city(city) for city in target_cities):
            return 50.0

    work_environment = job.work_environment.lower()
    if any(tag in work_environment for tag in vocabulary.remote_tags):
        return 35.0

    return 15.0


def calculate_relevance(
    job: Job,
    user: UserPreferences,
    vocabulary: Vocabulary,
    weights: RelevanceWeights
) -> Tuple[float, RelevanceBreakdown]:
    """
    Combine the four sub-terms into the relevance component.

    Returns: (relevance, breakdown)
    """
    breakdown = RelevanceBreakdown(
        skills=clamp(calculate_skills_score(job, user, vocabulary)),
        experience=clamp(calculate_experience_score(job, user, vocabulary)),
        career_path=clamp(calculate_career_path_score(job, user, vocabulary)),
        location=clamp(calculate_location_score(job, user, vocabulary)),
    )

    relevance = (
        weights.skills * breakdown.skills +
        weights.experience * breakdown.experience +
        weights.career_path * breakdown.career_path +
        weights.location * breakdown.location
    )
    return clamp(relevance), breakdown
