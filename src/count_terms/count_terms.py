"""Count term occurrences in article bodies."""

from count_terms.models import TermDefinition, TermGroup, TermKey, iter_terms, term_key


def capitalize_first(text: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def count_literal(literal: str, body: str) -> int:
    """Count non-overlapping occurrences of a literal (split-based)."""
    return len(body.split(literal)) - 1


def count_term(term: TermDefinition, body: str) -> int:
    """Count every alternative of a term in a body.

    Each alternative is counted as configured and again with a capitalised
    first letter, and both counts are added. An already-capitalised literal
    is therefore counted twice per occurrence. Matching is by substring:
    "refugee" also counts inside "refugees". Pad a literal with spaces in
    the term configuration to avoid that.
    """
    total = 0
    for alternative in term.alternatives:
        total += count_literal(alternative, body)
        total += count_literal(capitalize_first(alternative), body)
    return total


def count_terms(groups: tuple[TermGroup, ...], body: str) -> dict[TermKey, int]:
    """Count every configured term in one body, keyed by (group, term) label."""
    return {term_key(group, term): count_term(term, body) for group, term in iter_terms(groups)}
