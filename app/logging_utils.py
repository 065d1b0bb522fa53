"""
Structured logging helpers for import runs.

Each import run writes one JSON line per pipeline stage, all tagged with the
same run id and batch source so a run can be followed through the logs.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from app.domain.import_report import ImportIrregularity


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True, ensure_ascii=False))


class ImportRunLog:
    """
    Binds ``run_id`` and ``source`` to every event of one import run.
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        source: str,
        log_irregularities: bool = True,
        run_id: str | None = None,
    ) -> None:
        self._logger = logger
        self._log_irregularities = log_irregularities
        self.source = source
        self.run_id = run_id or uuid.uuid4().hex[:12]

    def stage(self, stage: str, **fields: Any) -> None:
        log_event(
            self._logger,
            logging.INFO,
            f"import.{stage}",
            run_id=self.run_id,
            source=self.source,
            **fields,
        )

    def aborted(self, **fields: Any) -> None:
        log_event(
            self._logger,
            logging.ERROR,
            "import.aborted",
            run_id=self.run_id,
            source=self.source,
            **fields,
        )

    def irregularity(self, irregularity: ImportIrregularity) -> None:
        if not self._log_irregularities:
            return
        log_event(
            self._logger,
            logging.WARNING,
            "import.irregularity",
            run_id=self.run_id,
            index=irregularity.index,
            reason=irregularity.reason.value,
            fields=list(irregularity.fields),
            message=irregularity.message,
        )
