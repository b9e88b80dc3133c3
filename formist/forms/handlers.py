from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from formist.schemas.form import TableData

SubmitHandler = Callable[[dict[str, Any]], Any]
LoadHandler = Callable[[], Any]
TableDataSource = Callable[[int, int, dict[str, Any]], "TableData | Mapping[str, Any]"]
# Receives the incoming starlette Request; returns a Response or any JSON-compatible value.
PageHandler = Callable[[Any], Any]


@dataclass
class FormHandlers:
    on_submit: SubmitHandler | None = None
    on_load: LoadHandler | None = None
    data_sources: dict[str, TableDataSource] = field(default_factory=dict)

    def data_source(self, field_name: str) -> TableDataSource | None:
        return self.data_sources.get(field_name)


@dataclass
class PageHandlers:
    handler: PageHandler | None = None
