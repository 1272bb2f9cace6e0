from __future__ import annotations

import csv
import io
from typing import Optional

from ..indices.comparator import YearComparison
from ..indices.model import IndexSet

INDEX_CSV_FIELDS = [
    "indice",
    "valor",
    "valor_tecnico",
    "valor_display",
    "unidad",
    "descripcion",
    "anterior",
    "variacion",
    "tipo_variacion",
]


def index_rows(indices: IndexSet, comparison: Optional[YearComparison] = None) -> list[dict]:
    rows = []
    for result in indices:
        compared = comparison.comparisons.get(result.key) if comparison else None
        rows.append(
            {
                "indice": result.key,
                "valor": result.value,
                "valor_tecnico": result.technical_value,
                "valor_display": result.display_value,
                "unidad": result.unit,
                "descripcion": result.description,
                "anterior": compared.previous if compared else "",
                "variacion": compared.variation.value if compared else "",
                "tipo_variacion": compared.variation.kind.value if compared else "",
            }
        )
    return rows


def export_indices_csv(indices: IndexSet, comparison: Optional[YearComparison] = None) -> bytes:
    """Index table as CSV bytes (BOM included so spreadsheets detect UTF-8)."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=INDEX_CSV_FIELDS)
    writer.writeheader()
    for row in index_rows(indices, comparison):
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")
