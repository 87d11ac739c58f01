"""
Known technical terms used to enrich LLM keyword lists.

The built-in table is tuned to software-engineering job postings. A different
domain dictionary can be supplied as YAML (see load_known_terms()) and passed
to the extractor; the built-in table stays the default.

YAML format:
    terms:
      - canonical: "C++"
        pattern: "C\\+\\+"     # optional, defaults to the escaped canonical spelling
      - canonical: "Docker"
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from omegaconf import OmegaConf


@dataclass(frozen=True)
class KnownTerm:
    """A term to look for (regex fragment) and the spelling to emit."""

    pattern: str
    canonical: str

    def compile(self) -> re.Pattern:
        # Lookarounds instead of \b so terms ending in symbols (C++, C#) still match
        return re.compile(rf"(?<!\w){self.pattern}(?!\w)", re.IGNORECASE)


def _term(canonical: str, pattern: Optional[str] = None) -> KnownTerm:
    return KnownTerm(pattern=pattern or re.escape(canonical), canonical=canonical)


# =============================================================================
# BUILT-IN TABLE
# =============================================================================

PROGRAMMING_LANGUAGES = (
    _term("C++"),
    _term("C#"),
    _term("Python"),
    _term("Java"),
    _term("Go"),
    _term("JavaScript"),
    _term("TypeScript"),
    _term("Node.js"),
    _term("SQL"),
)

FRAMEWORKS = (
    _term("SKLearn"),
    _term("XGBoost"),
    _term("PyTorch"),
    _term("Tensorflow"),
    _term("React"),
    _term("Angular"),
)

TOOLS = (
    _term("Kubernetes"),
    _term("K8s"),
    _term("Docker"),
    _term("CI/CD"),
    _term("Jenkins"),
    _term("GitLab"),
    _term("GitHub"),
    _term("GitHub Actions"),
)

CONCEPTS = (
    _term("ML/AI"),
    _term("Machine Learning"),
    _term("Artificial Intelligence"),
    _term("E2E"),
    _term("APIs"),
    _term("Cloud"),
    _term("Snowflake"),
)

DEFAULT_KNOWN_TERMS: Tuple[KnownTerm, ...] = PROGRAMMING_LANGUAGES + FRAMEWORKS + TOOLS + CONCEPTS

# Plain substring checks run against the lowercased source text after the regex
# pass: (canonical spelling, lowercase needle)
SUBSTRING_SAFETY_CHECKS = (
    ("C++", "c++"),
    ("Python", "python"),
    ("Java", "java "),
)


# =============================================================================
# VALIDATION
# =============================================================================


def validate_terms(terms: Iterable[KnownTerm], source: str = "known terms") -> Tuple[KnownTerm, ...]:
    """
    Compile every pattern up front so a bad table fails at configuration time.

    Raises:
        ValueError: Naming the source and the offending entry
    """
    terms = tuple(terms)
    for i, term in enumerate(terms):
        try:
            term.compile()
        except re.error as exc:
            raise ValueError(
                f"{source}: term {i} ({term.canonical!r}) has an invalid pattern {term.pattern!r}: {exc}"
            ) from exc
    return terms


# =============================================================================
# YAML LOADING
# =============================================================================


def load_known_terms(path: Path) -> Tuple[KnownTerm, ...]:
    """
    Load a known-term table from a YAML file.

    Args:
        path: YAML file with a top-level "terms" list

    Returns:
        Tuple of KnownTerm, in file order

    Raises:
        ValueError: If the file has no "terms" list, an entry lacks "canonical",
            or a pattern is not a valid regex
    """
    data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    entries = data.get("terms") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected a top-level 'terms' list")

    terms = []
    for i, entry in enumerate(entries):
        if isinstance(entry, str):
            entry = {"canonical": entry}
        canonical = str(entry.get("canonical") or "").strip() if isinstance(entry, dict) else ""
        if not canonical:
            raise ValueError(f"{path}: term {i} has no 'canonical' spelling")
        terms.append(_term(canonical, entry.get("pattern")))

    return validate_terms(terms, source=str(path))
