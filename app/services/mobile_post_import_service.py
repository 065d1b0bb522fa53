"""
app/services/mobile_post_import_service.py

Bulk import of mobile post rows from a batch source.

One run walks the batch through Received -> Validated -> Deduplicated ->
Persisted -> Reported. Every row is judged on its own: an invalid or
duplicate row is recorded as an irregularity and skipped, never aborting the
run. Rows are processed in source order so the first occurrence of a dedup
key wins. Re-running an unchanged batch persists nothing and reports every
row as a duplicate.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Sequence

from sqlalchemy.exc import DataError

from app.config import get_external_http_settings, get_feed_settings, get_import_settings
from app.connectors.base import BatchSource
from app.connectors.mobile_post_feed import MobilePostFeedConnector
from app.domain.import_report import (
    Accepted,
    ImportIrregularity,
    ImportReport,
    IrregularityReason,
    Rejected,
    dedup_key,
)
from app.exceptions import DuplicateRecordError, InvalidParameterError
from app.logging_utils import ImportRunLog
from app.repositories.mobile_post_repository import MobilePostStore
from app.validators.mobile_post_validator import MobilePostValidator, time_to_minutes

logger = logging.getLogger(__name__)


class MobilePostImportService:
    """
    Validates, deduplicates and persists one batch of raw rows.
    """

    def __init__(
        self,
        *,
        max_irregularities: int,
        log_irregularities: bool,
        validator: MobilePostValidator | None = None,
    ) -> None:
        self._max_irregularities = max(1, max_irregularities)
        self._log_irregularities = log_irregularities
        self._validator = validator or MobilePostValidator()

    def run(
        self,
        *,
        rows: Sequence[Any],
        store: MobilePostStore,
        source: str = "request",
    ) -> ImportReport:
        run_log = ImportRunLog(logger, source=source, log_irregularities=self._log_irregularities)
        irregularities: list[ImportIrregularity] = []
        run_log.stage("received", rows=len(rows))

        # Validated
        accepted: list[Accepted] = []
        skipped = 0
        for index, raw in enumerate(rows):
            outcome = self._validator.validate_import_row(raw, index)
            if isinstance(outcome, Rejected):
                skipped += 1
                self._record(
                    run_log,
                    irregularities,
                    ImportIrregularity(
                        index=outcome.index,
                        reason=outcome.reason,
                        fields=outcome.fields,
                        message=outcome.message,
                    ),
                )
                continue
            accepted.append(outcome)
        run_log.stage("validated", accepted=len(accepted), skipped=skipped)

        # Deduplicated
        known_keys = store.existing_dedup_keys()
        pending: list[Accepted] = []
        duplicates = 0
        for row in accepted:
            key = dedup_key(row.fields)
            if key in known_keys:
                duplicates += 1
                self._record(run_log, irregularities, _duplicate(row.index))
                continue
            known_keys.add(key)
            pending.append(row)
        run_log.stage("deduplicated", pending=len(pending), duplicates=duplicates)

        # Persisted
        imported = 0
        flagged = 0
        for row in pending:
            try:
                store.create(row.fields)
            except DuplicateRecordError:
                duplicates += 1
                self._record(run_log, irregularities, _duplicate(row.index))
                continue
            except DataError as exc:
                skipped += 1
                self._record(
                    run_log,
                    irregularities,
                    ImportIrregularity(
                        index=row.index,
                        reason=IrregularityReason.INVALID_ROW,
                        fields=(),
                        message=f"Rejected by storage: {exc.orig}",
                    ),
                )
                continue
            except Exception:
                run_log.aborted(index=row.index, imported=imported)
                raise
            imported += 1
            if _is_overnight(row.fields):
                flagged += 1
                self._record(
                    run_log,
                    irregularities,
                    ImportIrregularity(
                        index=row.index,
                        reason=IrregularityReason.OVERNIGHT_SCHEDULE,
                        fields=("openHour", "closeHour"),
                        message="closeHour is not after openHour; openAt filtering treats this stop as never open.",
                    ),
                )
        run_log.stage(
            "persisted",
            imported=imported,
            skipped=skipped,
            duplicates=duplicates,
            flagged=flagged,
        )

        report = ImportReport(
            received=len(rows),
            imported=imported,
            skipped=skipped,
            duplicates=duplicates,
            flagged=flagged,
            irregularities=irregularities,
        )
        run_log.stage(
            "reported",
            received=report.received,
            imported=report.imported,
            skipped=report.skipped,
            duplicates=report.duplicates,
            flagged=report.flagged,
            irregularities=len(report.irregularities),
        )
        return report

    def run_source(self, *, source: BatchSource, store: MobilePostStore) -> ImportReport:
        return self.run(rows=source.fetch_rows(), store=store, source=source.name)

    def _record(
        self,
        run_log: ImportRunLog,
        irregularities: list[ImportIrregularity],
        irregularity: ImportIrregularity,
    ) -> None:
        run_log.irregularity(irregularity)
        if len(irregularities) < self._max_irregularities:
            irregularities.append(irregularity)


def _duplicate(index: int) -> ImportIrregularity:
    return ImportIrregularity(
        index=index,
        reason=IrregularityReason.DUPLICATE,
        fields=("mobileCode", "seq"),
        message="Row matches an existing record or an earlier row in this batch.",
    )


def _is_overnight(fields: dict[str, Any]) -> bool:
    open_hour = fields.get("open_hour")
    close_hour = fields.get("close_hour")
    if open_hour is None or close_hour is None:
        return False
    return time_to_minutes(close_hour) <= time_to_minutes(open_hour)


@lru_cache(maxsize=1)
def get_mobile_post_import_service() -> MobilePostImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    settings = get_import_settings()
    return MobilePostImportService(
        max_irregularities=settings.max_irregularities,
        log_irregularities=settings.log_irregularities,
    )


def get_feed_source() -> BatchSource:
    """
    Build the configured upstream feed connector.
    """

    settings = get_feed_settings()
    if not settings.enabled or not settings.url:
        raise InvalidParameterError(
            "No import feed is configured; send the rows in the request body instead."
        )
    return MobilePostFeedConnector(settings=settings, http_settings=get_external_http_settings())
