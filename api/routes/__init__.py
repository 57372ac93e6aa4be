"""Evidence Integrity - API Routes"""

from .comparisons import router as comparisons_router
from .evidence import router as evidence_router


__all__ = [
    "comparisons_router",
    "evidence_router",
]
