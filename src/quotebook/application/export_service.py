# src/quotebook/application/export_service.py
"""
Export Service - Document Export and Share Orchestration

This module turns saved budgets and the cost worksheet into rendered views,
hands them to an export sink (PDF or image), and shares the plain-text
budget summary through a share sink with a fallback. It never touches the
archive, so a failed export cannot change stored budgets.

Files that USE this module:
- quotebook.app (wires ExportService into the workbench)
- tests.test_export_service (unit tests)

Files that this module USES:
- quotebook.adapters.formatting.formatter (document lines and share text)
- quotebook.application.notifier (Notifier)
- quotebook.domain.models (RenderedView, ExportOutcome)
"""
from __future__ import annotations

import logging
import re
from typing import Awaitable, Callable, Optional, Protocol

from quotebook.adapters.formatting.formatter import (
    budget_lines,
    cost_analysis_lines,
    delivery_note_lines,
    format_budget_share_text,
)
from quotebook.application.notifier import Notifier, NullNotifier
from quotebook.domain.errors import ExportFailure
from quotebook.domain.models import (
    Budget,
    CostAnalysis,
    CostSummary,
    Currency,
    ExportOutcome,
    RenderedView,
    Severity,
    TransportDetails,
)
from quotebook.shared.language import translate

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


class ExportSink(Protocol):
    """Protocol for document rasterizers."""
    async def export_document(self, view: RenderedView, filename: str) -> ExportOutcome:
        ...

    async def capture_image(self, view: RenderedView, filename: str) -> ExportOutcome:
        ...


class ShareSink(Protocol):
    """Protocol for platform share / clipboard targets."""
    async def share_text(self, title: str, text: str) -> ExportOutcome:
        ...


def suggested_filename(prefix: str, budget: Budget) -> str:
    """
    Build a file name like 'Presupuesto-0007-Acme Corp' (no extension).

    Path separators and other characters that are invalid in file names are
    replaced with underscores.
    """
    name = f"{prefix}-{budget.sequence_number}-{budget.client_name}".strip()
    return _UNSAFE_FILENAME_CHARS.sub("_", name)


class ExportService:
    """Renders documents and drives export/share sinks."""

    def __init__(
        self,
        export_sink: ExportSink,
        notifier: Optional[Notifier] = None,
        share_sink: Optional[ShareSink] = None,
        fallback_sink: Optional[ShareSink] = None,
        fallback_company_name: str = "",
        tax_rate: float = 0.16,
    ):
        """
        Initialize export service.

        Args:
            export_sink: PDF/image rasterizer
            notifier: Operator notifier
            share_sink: Preferred share target (optional)
            fallback_sink: Used when the share sink is absent or fails (optional)
            fallback_company_name: Issuer name for budgets without one
            tax_rate: Tax rate shown on documents
        """
        self.export_sink = export_sink
        self.notifier = notifier or NullNotifier()
        self.share_sink = share_sink
        self.fallback_sink = fallback_sink
        self.fallback_company_name = fallback_company_name
        self.tax_rate = tax_rate

    def render_budget(self, budget: Budget) -> RenderedView:
        return RenderedView(
            view_id=f"budget-{budget.id}",
            title=suggested_filename("Presupuesto", budget),
            lines=tuple(budget_lines(budget, self.fallback_company_name, self.tax_rate)),
        )

    def render_delivery_note(self, budget: Budget, transport: Optional[TransportDetails] = None) -> RenderedView:
        return RenderedView(
            view_id=f"delivery-note-{budget.id}",
            title=suggested_filename("Nota-Entrega", budget),
            lines=tuple(delivery_note_lines(budget, transport, self.fallback_company_name)),
        )

    def render_cost_analysis(self, analysis: CostAnalysis, summary: CostSummary,
                             currency: Currency) -> RenderedView:
        return RenderedView(
            view_id="cost-analysis",
            title="Analisis-Costos",
            lines=tuple(cost_analysis_lines(analysis, summary, currency)),
        )

    async def export_pdf(self, view: RenderedView, filename: Optional[str] = None) -> ExportOutcome:
        """
        Export a rendered view as a PDF document and notify the outcome.

        Returns:
            ExportOutcome (never raises for sink failures)
        """
        outcome = await self._call_sink(self.export_sink.export_document, view, filename or view.title)
        if outcome.success:
            self.notifier.notify(translate("pdf_ready_title"), translate("pdf_ready", path=outcome.path))
        else:
            self.notifier.notify(translate("error_title"), translate("pdf_failed"), Severity.ERROR)
        return outcome

    async def export_image(self, view: RenderedView, filename: Optional[str] = None) -> ExportOutcome:
        """
        Capture a rendered view as an image and notify the outcome.

        Returns:
            ExportOutcome (never raises for sink failures)
        """
        outcome = await self._call_sink(self.export_sink.capture_image, view, filename or view.title)
        if outcome.success:
            self.notifier.notify(translate("image_ready_title"), translate("image_ready", path=outcome.path))
        else:
            self.notifier.notify(translate("error_title"), translate("image_failed"), Severity.ERROR)
        return outcome

    async def share_budget(self, budget: Budget) -> ExportOutcome:
        """
        Share the plain-text summary of a budget.

        Tries the share sink first, then the fallback sink when the share
        sink is missing or fails.

        Returns:
            Outcome of the last sink tried
        """
        title = f"{translate('budget_title')} {budget.sequence_number}"
        text = format_budget_share_text(budget, self.fallback_company_name, self.tax_rate)

        outcome = ExportOutcome(success=False, error="no share sink configured")
        if self.share_sink is not None:
            outcome = await self._call_sink(self.share_sink.share_text, title, text)
            if outcome.success:
                self.notifier.notify(translate("shared_title"), translate("shared"))
                return outcome
            logger.warning("Share failed (%s), trying fallback", outcome.error)

        if self.fallback_sink is not None:
            outcome = await self._call_sink(self.fallback_sink.share_text, title, text)
            if outcome.success:
                self.notifier.notify(translate("copied_title"), translate("copied", path=outcome.path))
                return outcome

        self.notifier.notify(translate("error_title"), translate("share_failed"), Severity.ERROR)
        return outcome

    async def _call_sink(self, call: Callable[..., Awaitable[ExportOutcome]], *args) -> ExportOutcome:
        try:
            outcome = await call(*args)
            if not isinstance(outcome, ExportOutcome):
                raise ExportFailure(f"sink returned {type(outcome).__name__}, expected ExportOutcome")
            return outcome
        except ExportFailure as e:
            logger.error("Export failed: %s", e)
            return ExportOutcome(success=False, error=str(e))
        except Exception as e:
            logger.exception("Export sink failed: %s", e)
            return ExportOutcome(success=False, error=str(e))
