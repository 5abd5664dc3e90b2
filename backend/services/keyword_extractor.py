"""Local keyword extraction and matching between a resume and a job description.

TF-IDF keywords from the requirement part of the JD are merged with a
curated dictionary, then matched against the resume exactly, through
synonyms, or fuzzily. The result calibrates the ATS prompt and stands in for
the keyword analysis when the model leaves it out.
"""

import logging
import re

import numpy as np
from rapidfuzz import fuzz
from sklearn.feature_extraction.text import TfidfVectorizer

from models.responses import KeywordAnalysis

logger = logging.getLogger(__name__)

# Terms TF-IDF likes in job descriptions that are not requirements
JD_STOPWORDS: frozenset[str] = frozenset({
    "opportunity", "position", "role", "candidate", "candidates", "applicant",
    "company", "organization", "team", "teams", "department",
    "compensation", "salary", "benefits", "bonus", "equity", "insurance",
    "pto", "vacation", "retirement", "medical", "dental", "vision",
    "equal", "disability", "veteran", "gender", "protected", "status",
    "related", "including", "based", "preferred", "required", "minimum",
    "experience", "qualified", "qualifications", "responsible",
    "responsibilities", "requirements", "description", "overview", "mission",
    "passionate", "exciting", "innovative", "dynamic", "diverse",
    "competitive", "flexible", "remote", "hybrid", "onsite", "location",
    "deliver", "manage", "create", "build", "develop", "maintain", "ensure",
    "provide", "support", "help", "join", "apply", "work", "working",
    "job", "career", "people", "us", "our", "we", "will", "can", "may",
    "year", "years", "day", "time", "great", "best", "good", "strong",
    "new", "well", "also", "part", "full", "level", "senior", "junior",
})

_BOILERPLATE_RE = re.compile(
    r"(?:^|\n)\s*(?:what\s+we\s+offer|(?:our|the)\s+(?:benefits|perks|compensation)|"
    r"(?:salary|pay)\s+range|equal\s+(?:opportunity|employment)|privacy\s+(?:notice|policy)|"
    r"about\s+(?:us|the\s+company)|who\s+we\s+are)",
    re.IGNORECASE,
)

# Aliases resolved to one canonical form before matching
SKILL_SYNONYMS: dict[str, str] = {
    "js": "javascript", "es6": "javascript", "ts": "typescript",
    "reactjs": "react", "react.js": "react", "vuejs": "vue", "vue.js": "vue",
    "nodejs": "node.js", "node": "node.js", "nextjs": "next.js",
    "py": "python", "python3": "python", "sklearn": "scikit-learn",
    "torch": "pytorch", "k8s": "kubernetes",
    "amazon web services": "aws", "google cloud": "gcp", "microsoft azure": "azure",
    "cicd": "ci/cd", "postgres": "postgresql", "mongo": "mongodb",
    "mssql": "sql server", "golang": "go", "csharp": "c#", "cpp": "c++",
    "ml": "machine learning", "nlp": "natural language processing",
    "restful": "rest", "rest api": "rest", "rest apis": "rest",
    "pm": "project management", "ms excel": "excel", "microsoft excel": "excel",
    "crm software": "crm", "pos system": "pos",
}

# Dictionary layer for short JDs where TF-IDF has little to go on
COMMON_KEYWORDS: frozenset[str] = frozenset({
    "python", "javascript", "typescript", "java", "c++", "c#", "go", "rust",
    "ruby", "php", "swift", "kotlin", "sql", "react", "angular", "vue",
    "node.js", "django", "flask", "fastapi", "spring", "graphql", "rest",
    "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "ci/cd",
    "linux", "postgresql", "mysql", "mongodb", "redis", "kafka", "spark",
    "machine learning", "deep learning", "pytorch", "tensorflow",
    "scikit-learn", "pandas", "tableau", "excel", "salesforce", "crm",
    "agile", "scrum", "leadership", "communication", "project management",
    "customer service", "budgeting", "forecasting", "scheduling",
    "patient care", "hospitality", "inventory", "pos", "sales", "marketing",
})

FUZZY_THRESHOLD = 80

_TFIDF_REFERENCE = [
    "the candidate should have experience and skills in relevant areas",
    "looking for a professional with strong background and qualifications",
    "requirements include working with teams and delivering results",
]


def _normalize(text: str) -> str:
    # Drop sentence periods but keep dotted terms like "node.js"
    text = re.sub(r"\.(\s|$)", " ", text.lower())
    return re.sub(r"[^a-z0-9.#+/ -]", " ", text)


def _canonicalize(term: str) -> str:
    lower = term.lower().strip()
    return SKILL_SYNONYMS.get(lower, lower)


def _extract_terms(text: str) -> set[str]:
    """Unigrams, bigrams and trigrams of the normalized text."""
    words = _normalize(text).split()
    terms = set(words)
    for n in (2, 3):
        terms.update(" ".join(words[i : i + n]) for i in range(len(words) - n + 1))
    return terms


def _requirements_part(job_description: str) -> str:
    """Cut the JD at the first boilerplate heading (benefits, EEO, about us)."""
    match = _BOILERPLATE_RE.search(job_description)
    if match and match.start() > 50:
        return job_description[: match.start()].strip()
    return job_description.strip()


def _is_relevant_term(term: str) -> bool:
    words = term.lower().split()
    if len(words) == 1:
        return words[0] not in JD_STOPWORDS and len(words[0]) > 1 and not words[0].isdigit()
    return not all(w in JD_STOPWORDS for w in words)


def extract_tfidf_keywords(text: str, top_n: int = 20) -> list[str]:
    """Top TF-IDF terms of ``text`` against a small generic reference corpus."""
    if not text.strip():
        return []

    vectorizer = TfidfVectorizer(stop_words="english", sublinear_tf=True, ngram_range=(1, 2))
    try:
        matrix = vectorizer.fit_transform([text] + _TFIDF_REFERENCE)
    except ValueError:
        # empty vocabulary after stop-word removal
        return []
    names = vectorizer.get_feature_names_out()
    scores = matrix[0].toarray().flatten()
    top = np.argsort(scores)[::-1][:top_n]
    return [names[i] for i in top if scores[i] > 0 and len(names[i]) > 1]


def extract_keywords(job_description: str) -> set[str]:
    """Dictionary keywords mentioned in the JD."""
    jd_terms = _extract_terms(job_description)
    canonical = {_canonicalize(t) for t in jd_terms}
    return {kw for kw in COMMON_KEYWORDS if kw in canonical or kw in jd_terms}


def extract_keywords_combined(job_description: str, top_n: int = 20) -> list[str]:
    relevant = _requirements_part(job_description)
    tfidf = [kw for kw in extract_tfidf_keywords(relevant, top_n=top_n * 2) if _is_relevant_term(kw)]
    dictionary = extract_keywords(relevant)
    combined = sorted(dictionary) + [kw for kw in tfidf if kw not in dictionary]
    return combined[:top_n]


def _contains_term(text: str, term: str) -> bool:
    """Whole-term search, so "java" is not found inside "javascript"."""
    return re.search(rf"(?<![a-z0-9#+]){re.escape(term)}(?![a-z0-9#+])", text) is not None


def _matches(keyword: str, resume_terms: set[str], resume_normalized: str) -> bool:
    canonical = _canonicalize(keyword)
    if keyword.lower() in resume_terms or canonical in resume_terms:
        return True
    if canonical in {_canonicalize(t) for t in resume_terms}:
        return True
    if len(canonical) >= 3 and _contains_term(resume_normalized, canonical):
        return True
    if len(canonical) >= 3:
        return any(
            len(term) >= 3 and fuzz.ratio(canonical, term) >= FUZZY_THRESHOLD
            for term in resume_terms
        )
    return False


def match_keywords(resume_text: str, keywords: list[str] | set[str]) -> tuple[list[str], list[str]]:
    """Split keywords into (matched, missing) against the resume."""
    resume_terms = _extract_terms(resume_text)
    resume_normalized = _normalize(resume_text)
    matched: list[str] = []
    missing: list[str] = []
    for kw in sorted(set(keywords)):
        (matched if _matches(kw, resume_terms, resume_normalized) else missing).append(kw)
    return matched, missing


def build_keyword_analysis(resume_text: str, job_description: str) -> KeywordAnalysis:
    keywords = extract_keywords_combined(job_description)
    matched, missing = match_keywords(resume_text, keywords)
    logger.debug("Local keyword match: %d matched, %d missing", len(matched), len(missing))
    return KeywordAnalysis(matched_keywords=matched, missing_keywords=missing)
