"""Edit modes, classification outcomes and edit results."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from compledger.models.employee import CompensationPayload
from compledger.models.view import HistoryView


class EditMode(StrEnum):
    """What the user asked for in the salary UI."""

    EDIT_CURRENT = "edit_current"
    ADD_NEW = "add_new"
    EDIT_HISTORICAL = "edit_historical"
    DELETE_HISTORICAL = "delete_historical"


class EditKind(StrEnum):
    """How an edit was applied to the ledger."""

    POPULATE_FROM_LEGACY = "populate_from_legacy"
    CORRECT_OPEN_REVISION = "correct_open_revision"
    APPEND_NEW_REVISION = "append_new_revision"
    EDIT_HISTORICAL = "edit_historical"
    DELETE_HISTORICAL = "delete_historical"


class EditResult(BaseModel):
    """Outcome of a persisted edit."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    kind: EditKind
    payload: CompensationPayload
    view: HistoryView
