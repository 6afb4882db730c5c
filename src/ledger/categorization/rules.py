"""Deterministic transaction categorization.

Imported statement lines carry no category, so one is inferred from the
description with keyword rules. The rules are plain substring checks so
they stay:
- fast (no external calls)
- explainable (auditable)
- total (any string maps to exactly one category)
"""

from __future__ import annotations

DEFAULT_CATEGORY = "Outros"

# Ordering matters: earlier matches win.
_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("Alimentação", ("ifood", "restaurante")),
    ("Transporte", ("uber", "99")),
    ("Assinaturas", ("netflix", "spotify", "disney+")),
    ("Moradia", ("aluguel", "condominio")),
    ("Supermercado", ("mercado", "supermercado")),
]

# Public taxonomy.
CATEGORIES: list[str] = [category for category, _ in _RULES] + [DEFAULT_CATEGORY]


def categorize(description: str | None) -> str:
    """Infer a category from a transaction description.

    Args:
        description: Free-text description, e.g. "Ifood Delivery".

    Returns:
        The category of the first rule with a keyword contained in the
        description (case-insensitive), or DEFAULT_CATEGORY.
    """
    text = (description or "").lower()
    if not text.strip():
        return DEFAULT_CATEGORY

    for category, keywords in _RULES:
        if any(keyword in text for keyword in keywords):
            return category

    return DEFAULT_CATEGORY
