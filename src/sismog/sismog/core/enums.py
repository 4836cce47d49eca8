from __future__ import annotations

from enum import Enum


class TaxRegime(str, Enum):
    """Regime tributário de uma empresa."""

    SIMPLES_NACIONAL = "Simples Nacional"
    LUCRO_PRESUMIDO = "Lucro Presumido"
    LUCRO_REAL = "Lucro Real"


class FeedbackKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class FormMode(str, Enum):
    """Whether a form session edits a persisted record or creates a new one."""

    CREATING = "creating"
    EDITING = "editing"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
