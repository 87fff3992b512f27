"""Custom SQLAlchemy types used by the persistence layer."""
from __future__ import annotations

from typing import Optional

from sqlalchemy.types import Text, TypeDecorator

YES = "SIM"
NO = "NÃO"


class YesNoFlag(TypeDecorator[bool]):
    """Boolean stored as the spreadsheet's ``'SIM'``/``'NÃO'`` text values.

    Anything other than ``'SIM'`` reads back as False, matching how the
    legacy sheet was filled in by hand. NULL stays NULL so an unevaluated
    notebook is distinguishable from an explicit "no".
    """

    cache_ok = True
    impl = Text

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        if isinstance(value, str):
            return YES if value.strip().upper() == YES else NO
        return YES if value else NO

    def process_result_value(self, value, dialect) -> Optional[bool]:  # type: ignore[override]
        if value is None:
            return None
        return value.strip().upper() == YES

    def copy(self, **kwargs):  # type: ignore[override]
        return YesNoFlag()
